"""
Some utils for appforge
"""

import re
from ..exceptions import UnsupportedFeatureError

# ----------------------
#
#  Name Converting
#
# ----------------------

cpn = re.compile(r'(?<!^)(?=[A-Z])')
cp_pattern = re.compile(r'^[a-zA-Z][a-zA-Z0-9]*$')

def to_snake(name: str) -> str:
    """
    Convert camelCase or PascalCase to snake_case
    """
    if not cp_pattern.fullmatch(name):
        raise UnsupportedFeatureError(f"Only PascalCase and camelCase can use to_snake, but '{name}' got.")
    return cpn.sub('_', name).lower()

