"""
Declaration model for C# to TypeScript generation.

This module contains the dataclasses describing the already-resolved input
handed over by the parsing front-end: declarations, their members, type
references and the restricted constant expressions that can be translated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, List, Optional


# =============================================================================
# BASE NODE
# =============================================================================

@dataclass
class Node:
    """Base class for all declaration model nodes."""
    pass


# =============================================================================
# TYPE REFERENCES
# =============================================================================

@dataclass
class TypeReference(Node):
    """Base class for all type reference nodes."""
    pass


@dataclass
class PrimitiveType(TypeReference):
    """A built-in type keyword or well-known value type (int, string, Guid)."""
    name: str


@dataclass
class NamedType(TypeReference):
    """A reference to a user type, optionally namespace-qualified."""
    name: str
    namespace: Optional[str] = None

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return f'{self.namespace}.{self.name}'
        return self.name


@dataclass
class NullableType(TypeReference):
    """T? for value and reference types alike."""
    inner: TypeReference


@dataclass
class ArrayType(TypeReference):
    """T[]"""
    element: TypeReference


@dataclass
class GenericType(TypeReference):
    """A constructed generic type (e.g., List<T>, Dictionary<K, V>, Func<T, R>)."""
    name: str
    arguments: List[TypeReference] = field(default_factory=list)


@dataclass
class FunctionType(TypeReference):
    """An explicit function type; a missing return type means void."""
    parameter_types: List[TypeReference] = field(default_factory=list)
    return_type: Optional[TypeReference] = None


# =============================================================================
# CONSTANT EXPRESSIONS
# =============================================================================

@dataclass
class Expression(Node):
    """Base class for all constant expression nodes."""
    pass


@dataclass
class Literal(Expression):
    """Represents a literal token (number, string, bool, char, null)."""
    text: str
    kind: str = 'number'  # 'number', 'string', 'bool', 'char', 'null'


@dataclass
class EnumMemberReference(Expression):
    """Represents Enum.Member."""
    enum_name: str
    member_name: str


@dataclass
class ConstantReference(Expression):
    """A bare identifier bound to a compile-time constant.

    value holds the constant the semantic resolver computed, or None when it
    could not be resolved.
    """
    name: str
    value: Any = None


@dataclass
class ArrayLiteral(Expression):
    """Represents an array or collection expression (e.g., [1, 2, ..rest])."""
    elements: List[Expression] = field(default_factory=list)


@dataclass
class SpreadElement(Expression):
    """Represents a spread element inside a collection expression."""
    operand: Expression


@dataclass
class PropertyAssignment(Node):
    """A Name = value entry of an object initializer."""
    name: str
    value: Expression


@dataclass
class ObjectCreation(Expression):
    """Represents new T { ... } with either property or collection initializers."""
    type: Optional[TypeReference] = None
    properties: List[PropertyAssignment] = field(default_factory=list)
    elements: List[Expression] = field(default_factory=list)


@dataclass
class NegateExpression(Expression):
    """Represents unary minus."""
    operand: Expression


@dataclass
class ParenthesizedExpression(Expression):
    """Represents (expr)."""
    operand: Expression


@dataclass
class InvocationExpression(Expression):
    """Represents a method call; never translatable."""
    callee: str
    arguments: List[Expression] = field(default_factory=list)


@dataclass
class BinaryExpression(Expression):
    """Represents a binary operation (e.g., a + b).

    Never translatable as a constant export. Enum initializers evaluate the
    integer operators.
    """
    left: Expression
    operator: str
    right: Expression


@dataclass
class ConditionalExpression(Expression):
    """Represents a ? b : c; never translatable."""
    condition: Expression
    when_true: Expression
    when_false: Expression


@dataclass
class OpaqueExpression(Expression):
    """Any other expression, kept only as source text."""
    text: str = ''


# =============================================================================
# DECLARATIONS
# =============================================================================

class DeclarationKind(Enum):
    """The rendering path a declaration takes."""
    STRUCTURED_TYPE = 'structured-type'
    ENUM = 'enum'
    CONSTANT_HOLDER = 'constant-holder'
    UNKNOWN = 'unknown'


class CapabilityTag(Enum):
    """Attribute-derived markers that override a member's type mapping."""
    RENDER_NODE = 'render-node'
    DOM_ELEMENT = 'dom-element'


@dataclass
class Member(Node):
    """A property, field or enum member of a declaration."""
    name: str
    type: Optional[TypeReference] = None
    capabilities: FrozenSet[CapabilityTag] = frozenset()
    initializer: Optional[Expression] = None
    value: Any = None  # Resolved constant value (enum members)
    documentation: Optional[str] = None
    is_static: bool = False
    is_read_only: bool = False
    is_const: bool = False
    is_computed: bool = False  # Expression-bodied getter without backing field


@dataclass
class Declaration(Node):
    """One convertible type description from a source file."""
    name: str
    kind: DeclarationKind
    source_path: str
    members: List[Member] = field(default_factory=list)
    base_types: List[TypeReference] = field(default_factory=list)
    type_parameters: List[str] = field(default_factory=list)
    documentation: Optional[str] = None
