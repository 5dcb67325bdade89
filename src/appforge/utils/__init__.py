"""
appforge Utils Module

- logger: Logging setup and configuration
- util: Name conversion helpers
- reflection: Class discovery and reflection utilities

Usage:
    from appforge.utils import setup_logger, discover_classes
"""

from .logger import setup_logger, parse_module_levels
from .util import to_snake
from .reflection import discover_classes, extract_app_info

__all__ = [
    'setup_logger',
    'parse_module_levels',
    'discover_classes',
    'extract_app_info',
    'to_snake',
]
