"""
JSON interchange loader for resolved declarations.

The parsing front-end (Roslyn or anything else that understands C#) dumps the
declarations marked for conversion as JSON. This module turns that document
into the dataclasses of ast_nodes, resolving attribute names into capability
tags once so that code generation never has to match attribute text.

Document shape:
{
    "declarations": [
        {
            "name": "User",
            "kind": "structured-type",
            "sourcePath": "Models/User.cs",
            "documentation": "<summary>A user.</summary>",
            "baseTypes": ["EntityBase"],
            "typeParameters": [],
            "members": [
                {"name": "Id", "type": "Guid"},
                {"name": "Avatar", "type": "object", "attributes": ["ReactNode"]}
            ]
        }
    ]
}
"""

import json
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from .ast_nodes import (
    ArrayLiteral,
    ArrayType,
    BinaryExpression,
    CapabilityTag,
    ConditionalExpression,
    ConstantReference,
    Declaration,
    DeclarationKind,
    EnumMemberReference,
    Expression,
    FunctionType,
    GenericType,
    InvocationExpression,
    Literal,
    Member,
    NamedType,
    NegateExpression,
    NullableType,
    ObjectCreation,
    OpaqueExpression,
    ParenthesizedExpression,
    PrimitiveType,
    PropertyAssignment,
    SpreadElement,
    TypeReference,
)
from ..type_system.mappings import PRIMITIVE_TYPE_MAP


# Attribute names (with and without the Attribute suffix) -> capability
ATTRIBUTE_CAPABILITIES: Dict[str, CapabilityTag] = {
    'ReactNode': CapabilityTag.RENDER_NODE,
    'ReactNodeAttribute': CapabilityTag.RENDER_NODE,
    'HtmlElement': CapabilityTag.DOM_ELEMENT,
    'HtmlElementAttribute': CapabilityTag.DOM_ELEMENT,
}

DECLARATION_KIND_ALIASES: Dict[str, DeclarationKind] = {
    'structured-type': DeclarationKind.STRUCTURED_TYPE,
    'class': DeclarationKind.STRUCTURED_TYPE,
    'record': DeclarationKind.STRUCTURED_TYPE,
    'struct': DeclarationKind.STRUCTURED_TYPE,
    'interface': DeclarationKind.STRUCTURED_TYPE,
    'enum': DeclarationKind.ENUM,
    'constant-holder': DeclarationKind.CONSTANT_HOLDER,
    'constants': DeclarationKind.CONSTANT_HOLDER,
}


def _require(data: Dict[str, Any], key: str, what: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f'Expected an object for {what}, got {type(data).__name__}')
    if key not in data:
        raise ValueError(f'Missing "{key}" in {what}')
    return data[key]


# =============================================================================
# CAPABILITIES
# =============================================================================

def capabilities_from_attributes(attributes: Iterable[str]) -> FrozenSet[CapabilityTag]:
    """Resolve attribute names to capability tags.

    Namespace-qualified names (Cs2Ts.ReactNode) are matched on their last
    segment; unrelated attributes are ignored.
    """
    tags = set()
    for attribute in attributes:
        short_name = attribute.rsplit('.', 1)[-1]
        tag = ATTRIBUTE_CAPABILITIES.get(short_name)
        if tag is not None:
            tags.add(tag)
    return frozenset(tags)


# =============================================================================
# TYPE REFERENCES
# =============================================================================

def _type_from_name(name: str) -> TypeReference:
    """Build a type reference from the string shorthand."""
    if name in PRIMITIVE_TYPE_MAP:
        return PrimitiveType(name)
    if '.' in name:
        namespace, short_name = name.rsplit('.', 1)
        return NamedType(short_name, namespace)
    return NamedType(name)


def type_from_dict(data: Any) -> TypeReference:
    """Build a TypeReference tree from its JSON form."""
    if isinstance(data, str):
        return _type_from_name(data)

    kind = _require(data, 'kind', 'type reference')
    if kind == 'primitive':
        return PrimitiveType(_require(data, 'name', 'primitive type'))
    elif kind == 'named':
        return NamedType(_require(data, 'name', 'named type'), data.get('namespace'))
    elif kind == 'nullable':
        return NullableType(type_from_dict(_require(data, 'inner', 'nullable type')))
    elif kind == 'array':
        return ArrayType(type_from_dict(_require(data, 'element', 'array type')))
    elif kind == 'generic':
        return GenericType(
            _require(data, 'name', 'generic type'),
            [type_from_dict(arg) for arg in data.get('arguments', [])],
        )
    elif kind == 'function':
        returns = data.get('returns')
        return FunctionType(
            [type_from_dict(p) for p in data.get('parameters', [])],
            type_from_dict(returns) if returns is not None else None,
        )
    raise ValueError(f'Unknown type reference kind "{kind}"')


# =============================================================================
# EXPRESSIONS
# =============================================================================

def expression_from_dict(data: Any) -> Expression:
    """Build a constant expression tree from its JSON form.

    Unknown expression kinds load as OpaqueExpression so that the translator
    can report them as unsupported instead of failing the load.
    """
    kind = _require(data, 'kind', 'expression')

    if kind == 'literal':
        return Literal(str(_require(data, 'text', 'literal')), data.get('literalKind', 'number'))
    elif kind == 'enumMember':
        return EnumMemberReference(
            _require(data, 'enum', 'enum member reference'),
            _require(data, 'member', 'enum member reference'),
        )
    elif kind == 'constant':
        return ConstantReference(_require(data, 'name', 'constant reference'), data.get('value'))
    elif kind == 'array':
        return ArrayLiteral([expression_from_dict(e) for e in data.get('elements', [])])
    elif kind == 'spread':
        return SpreadElement(expression_from_dict(_require(data, 'operand', 'spread')))
    elif kind == 'object':
        type_data = data.get('type')
        return ObjectCreation(
            type=type_from_dict(type_data) if type_data is not None else None,
            properties=[
                PropertyAssignment(
                    _require(p, 'name', 'property assignment'),
                    expression_from_dict(_require(p, 'value', 'property assignment')),
                )
                for p in data.get('properties', [])
            ],
            elements=[expression_from_dict(e) for e in data.get('elements', [])],
        )
    elif kind == 'negate':
        return NegateExpression(expression_from_dict(_require(data, 'operand', 'negation')))
    elif kind == 'parenthesized':
        return ParenthesizedExpression(expression_from_dict(_require(data, 'operand', 'parentheses')))
    elif kind == 'invocation':
        return InvocationExpression(
            data.get('callee', ''),
            [expression_from_dict(a) for a in data.get('arguments', [])],
        )
    elif kind == 'binary':
        return BinaryExpression(
            expression_from_dict(_require(data, 'left', 'binary expression')),
            data.get('operator', ''),
            expression_from_dict(_require(data, 'right', 'binary expression')),
        )
    elif kind == 'conditional':
        return ConditionalExpression(
            expression_from_dict(_require(data, 'condition', 'conditional')),
            expression_from_dict(_require(data, 'whenTrue', 'conditional')),
            expression_from_dict(_require(data, 'whenFalse', 'conditional')),
        )
    return OpaqueExpression(data.get('text', kind))


# =============================================================================
# DECLARATIONS
# =============================================================================

def member_from_dict(data: Dict[str, Any]) -> Member:
    """Build a Member, resolving attributes into capability tags."""
    name = _require(data, 'name', 'member')
    type_data = data.get('type')
    initializer = data.get('initializer')

    capabilities = set(capabilities_from_attributes(data.get('attributes', [])))
    for tag in data.get('capabilities', []):
        capabilities.add(CapabilityTag(tag))

    return Member(
        name=name,
        type=type_from_dict(type_data) if type_data is not None else None,
        capabilities=frozenset(capabilities),
        initializer=expression_from_dict(initializer) if initializer is not None else None,
        value=data.get('value'),
        documentation=data.get('documentation'),
        is_static=bool(data.get('isStatic', False)),
        is_read_only=bool(data.get('isReadOnly', False)),
        is_const=bool(data.get('isConst', False)),
        is_computed=bool(data.get('isComputed', False)),
    )


def declaration_from_dict(data: Dict[str, Any]) -> Declaration:
    """Build a Declaration from its JSON form."""
    name = _require(data, 'name', 'declaration')
    kind_name = _require(data, 'kind', f'declaration "{name}"')
    source_path = _require(data, 'sourcePath', f'declaration "{name}"')

    return Declaration(
        name=name,
        kind=DECLARATION_KIND_ALIASES.get(kind_name, DeclarationKind.UNKNOWN),
        source_path=source_path.replace('\\', '/'),
        members=[member_from_dict(m) for m in data.get('members', [])],
        base_types=[type_from_dict(b) for b in data.get('baseTypes', [])],
        type_parameters=list(data.get('typeParameters', [])),
        documentation=data.get('documentation'),
    )


def declarations_from_json(text: str) -> List[Declaration]:
    """Parse a JSON document into a list of declarations."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f'Invalid declaration document: {e}') from e

    if isinstance(data, dict):
        data = _require(data, 'declarations', 'declaration document')
    if not isinstance(data, list):
        raise ValueError('Declaration document must be a list or contain a "declarations" list')
    return [declaration_from_dict(d) for d in data]


def load_declarations(path: str, encoding: Optional[str] = 'utf-8') -> List[Declaration]:
    """Load declarations from a JSON file."""
    with open(path, 'r', encoding=encoding) as f:
        return declarations_from_json(f.read())
