"""
Type mappings for C# to TypeScript.

This module contains the fixed tables the type converter consults: primitive
names, the generic container families, the delegate shapes, the wire-format
hints attached to some primitives and the capability overrides.
"""

from typing import Dict, FrozenSet, Optional, Tuple


# =============================================================================
# PRIMITIVES
# =============================================================================

PRIMITIVE_TYPE_MAP: Dict[str, str] = {
    # Numeric kinds -> number
    'byte': 'number',
    'sbyte': 'number',
    'short': 'number',
    'ushort': 'number',
    'int': 'number',
    'uint': 'number',
    'long': 'number',
    'ulong': 'number',
    'nint': 'number',
    'nuint': 'number',
    'float': 'number',
    'double': 'number',
    'decimal': 'number',
    'Byte': 'number',
    'SByte': 'number',
    'Int16': 'number',
    'UInt16': 'number',
    'Int32': 'number',
    'UInt32': 'number',
    'Int64': 'number',
    'UInt64': 'number',
    'Single': 'number',
    'Double': 'number',
    'Decimal': 'number',
    # Boolean
    'bool': 'boolean',
    'Boolean': 'boolean',
    # Text and identifiers -> string
    'string': 'string',
    'String': 'string',
    'char': 'string',
    'Char': 'string',
    'Guid': 'string',
    'Uri': 'string',
    # Dates
    'DateTime': 'Date',
    'DateOnly': 'Date',
    # Untyped catch-all
    'object': 'unknown',
    'Object': 'unknown',
    'dynamic': 'unknown',
    # Serialized in a wire format that needs a documentation hint
    'TimeSpan': 'number',
    'DateTimeOffset': 'string',
}

# Primitive name -> hint key
PRIMITIVE_TYPE_HINTS: Dict[str, str] = {
    'TimeSpan': 'duration',
    'DateTimeOffset': 'date-time-offset',
}

# Hint key -> documentation line
TYPE_HINT_LINES: Dict[str, str] = {
    'duration': 'Duration in milliseconds.',
    'date-time-offset': 'ISO-8601 date-time string with UTC offset.',
}


# =============================================================================
# GENERIC FAMILIES
# =============================================================================

# One type argument -> T[]
LINEAR_CONTAINERS: FrozenSet[str] = frozenset({
    'List',
    'IList',
    'IEnumerable',
    'ICollection',
    'IReadOnlyList',
    'IReadOnlyCollection',
    'Collection',
    'ReadOnlyCollection',
    'ObservableCollection',
    'HashSet',
    'ISet',
    'IReadOnlySet',
    'SortedSet',
    'LinkedList',
    'Queue',
    'Stack',
    'ImmutableArray',
    'ImmutableList',
    'ImmutableHashSet',
})

# Two type arguments (key, value) -> Partial<Record<K, V>>
MAP_CONTAINERS: FrozenSet[str] = frozenset({
    'Dictionary',
    'IDictionary',
    'IReadOnlyDictionary',
    'SortedDictionary',
    'SortedList',
    'ConcurrentDictionary',
    'ImmutableDictionary',
})

NULLABLE_GENERIC = 'Nullable'

# Delegates: no return value
ACTION_DELEGATE = 'Action'
MAX_ACTION_ARGUMENTS = 2

# Delegates: last type argument is the return type
FUNC_DELEGATE = 'Func'
MAX_FUNC_ARGUMENTS = 3


# =============================================================================
# CAPABILITY OVERRIDES
# =============================================================================

# Capability value -> (TypeScript type, module to import it from or None)
CAPABILITY_TYPES: Dict[str, Tuple[str, Optional[str]]] = {
    'render-node': ('ReactNode', 'react'),
    'dom-element': ('HTMLElement', None),
}

UNSUPPORTED_TYPE = 'unknown'


# =============================================================================
# LOOKUP FUNCTIONS
# =============================================================================

def primitive_to_ts(name: str, overrides: Optional[Dict[str, str]] = None) -> Optional[str]:
    """
    Look up the TypeScript type for a primitive name.

    Args:
        name: The C# type name (keyword or framework name)
        overrides: Optional per-run additions that take precedence

    Returns:
        The TypeScript type string, or None when the name is not a primitive
    """
    if overrides and name in overrides:
        return overrides[name]
    return PRIMITIVE_TYPE_MAP.get(name)


def hint_for_primitive(name: str, overrides: Optional[Dict[str, str]] = None) -> Optional[str]:
    """Get the documentation hint key for a primitive name, if any."""
    if overrides and name in overrides:
        return overrides[name]
    return PRIMITIVE_TYPE_HINTS.get(name)


def hint_line(hint: str) -> str:
    """Get the documentation line for a hint key; unknown keys are used verbatim."""
    return TYPE_HINT_LINES.get(hint, hint)
