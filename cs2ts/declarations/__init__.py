"""
Declaration model for the C# to TypeScript generator.

This module provides the resolved declaration dataclasses and the JSON
interchange loader that builds them.
"""

from .ast_nodes import (
    # Base
    Node,
    # Types
    TypeReference,
    PrimitiveType,
    NamedType,
    NullableType,
    ArrayType,
    GenericType,
    FunctionType,
    # Expressions
    Expression,
    Literal,
    EnumMemberReference,
    ConstantReference,
    ArrayLiteral,
    SpreadElement,
    PropertyAssignment,
    ObjectCreation,
    NegateExpression,
    ParenthesizedExpression,
    InvocationExpression,
    BinaryExpression,
    ConditionalExpression,
    OpaqueExpression,
    # Declarations
    DeclarationKind,
    CapabilityTag,
    Member,
    Declaration,
)
from .loader import (
    capabilities_from_attributes,
    type_from_dict,
    expression_from_dict,
    member_from_dict,
    declaration_from_dict,
    declarations_from_json,
    load_declarations,
)

__all__ = [
    'Node',
    'TypeReference',
    'PrimitiveType',
    'NamedType',
    'NullableType',
    'ArrayType',
    'GenericType',
    'FunctionType',
    'Expression',
    'Literal',
    'EnumMemberReference',
    'ConstantReference',
    'ArrayLiteral',
    'SpreadElement',
    'PropertyAssignment',
    'ObjectCreation',
    'NegateExpression',
    'ParenthesizedExpression',
    'InvocationExpression',
    'BinaryExpression',
    'ConditionalExpression',
    'OpaqueExpression',
    'DeclarationKind',
    'CapabilityTag',
    'Member',
    'Declaration',
    'capabilities_from_attributes',
    'type_from_dict',
    'expression_from_dict',
    'member_from_dict',
    'declaration_from_dict',
    'declarations_from_json',
    'load_declarations',
]
