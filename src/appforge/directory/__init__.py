"""
appforge Directory Module

The directory answers one question for drivers: what is the current
record of an infrastructure target?
"""

from .models import Infra
from .backend import Backend, MemoryBackend, FileBackend
from ..constants import InfraState

__all__ = [
    'Infra',
    'InfraState',
    'Backend',
    'MemoryBackend',
    'FileBackend',
]
