"""
Code Generator Module

Renders grouped paths and field lookups as TypeScript source.
"""

from .naming import path_to_constant_name, to_camel_case, to_pascal_case, to_upper_snake, to_valid_identifier
from .typescript import OutputStyle, TypeScriptGenerator

__all__ = [
    "OutputStyle",
    "TypeScriptGenerator",
    "path_to_constant_name",
    "to_camel_case",
    "to_pascal_case",
    "to_upper_snake",
    "to_valid_identifier",
]
