"""
Concrete application drivers, discovered by `AppRegistry`.

A driver class named `<Kind>App` serves Appfiles with `type: <kind>`.
"""

from .go import GoApp

__all__ = [
    'GoApp',
]
