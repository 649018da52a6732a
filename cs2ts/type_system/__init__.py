"""
Types module for the C# to TypeScript generator.

This module provides the declaration registry and the type mapping tables.
"""

from .registry import TypeRegistry, strip_extension
from .mappings import (
    primitive_to_ts,
    hint_for_primitive,
    hint_line,
    PRIMITIVE_TYPE_MAP,
    PRIMITIVE_TYPE_HINTS,
    TYPE_HINT_LINES,
    LINEAR_CONTAINERS,
    MAP_CONTAINERS,
    CAPABILITY_TYPES,
)

__all__ = [
    'TypeRegistry',
    'strip_extension',
    'primitive_to_ts',
    'hint_for_primitive',
    'hint_line',
    'PRIMITIVE_TYPE_MAP',
    'PRIMITIVE_TYPE_HINTS',
    'TYPE_HINT_LINES',
    'LINEAR_CONTAINERS',
    'MAP_CONTAINERS',
    'CAPABILITY_TYPES',
]
