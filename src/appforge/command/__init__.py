"""
Building blocks shared by the appf commands.
"""

from .meta import FlagSetFlags, Meta, MetaCommand, command_ui, flag_set

__all__ = [
    'FlagSetFlags',
    'Meta',
    'MetaCommand',
    'command_ui',
    'flag_set',
]
