"""
appforge Bases Module

Concrete implementations of the abstractions in `appforge.app`.

- apps: application drivers (GoApp)

Usage:
    from appforge.bases import GoApp
"""

from .apps import GoApp

__all__ = [
    'GoApp',
]
