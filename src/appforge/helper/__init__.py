"""
Wrappers around the external tools drivers delegate to.
"""

from .runner import ToolResult, run_tool
from .packer import Packer
from .vagrant import BuildOptions, DevOptions, Vagrant

__all__ = [
    'ToolResult',
    'run_tool',
    'Packer',
    'Vagrant',
    'BuildOptions',
    'DevOptions',
]
