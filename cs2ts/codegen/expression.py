"""
Constant expression generation for C# to TypeScript generation.

Only a restricted grammar is translated: literals, enum member references,
compile-time constants, array/collection and object initializers, spreads,
parentheses and unary minus. Everything else yields UNSUPPORTED, which
propagates to the outermost expression so the caller can drop the field.
"""

import re
from typing import List, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext

from .base import BaseGenerator
from .context import ImportUsage
from .naming import to_member_case
from ..declarations.ast_nodes import (
    ArrayLiteral,
    ConstantReference,
    EnumMemberReference,
    Expression,
    GenericType,
    Literal,
    NegateExpression,
    ObjectCreation,
    ParenthesizedExpression,
    SpreadElement,
)
from ..type_system.mappings import LINEAR_CONTAINERS


class Unsupported:
    """Result of translating an expression outside the supported grammar."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'UNSUPPORTED'

    def __bool__(self) -> bool:
        return False


UNSUPPORTED = Unsupported()

TranslationResult = Union[str, Unsupported]

# 10m, 1.5f, 3L, 7UL, 2.0d -> C# numeric suffixes have no TypeScript equivalent
_NUMERIC_SUFFIX_RE = re.compile(r'^(.*?[0-9a-fA-F.])(?:[uU][lL]?|[lL][uU]?|[mMfFdD])$')


class ExpressionGenerator(BaseGenerator):
    """
    Generates TypeScript code from constant expression nodes.

    This class handles:
    - Literals (numbers, strings, booleans, chars, null)
    - Enum member references (recorded as value imports)
    - Compile-time constant references (re-quoted values)
    - Array literals, spreads and collection initializers
    - Object initializers (multi-line object literals)
    - Parentheses and unary negation
    """

    def __init__(self, ctx: 'CodeGenerationContext'):
        """
        Initialize the expression generator.

        Args:
            ctx: The code generation context
        """
        super().__init__(ctx)
        self._pending_imports: List[str] = []

    # =========================================================================
    # MAIN DISPATCH
    # =========================================================================

    def generate(self, expr: Expression) -> TranslationResult:
        """Translate an expression and commit its imports if it is supported.

        Args:
            expr: The expression node

        Returns:
            The TypeScript code string, or UNSUPPORTED
        """
        self._pending_imports = []
        result = self.translate(expr)
        if result is not UNSUPPORTED:
            for name in self._pending_imports:
                self._ctx.mark_import(name, ImportUsage.VALUE)
        self._pending_imports = []
        return result

    def translate(self, expr: Expression) -> TranslationResult:
        """Translate an expression without committing imports."""
        if isinstance(expr, Literal):
            return self.generate_literal(expr)
        elif isinstance(expr, EnumMemberReference):
            return self.generate_enum_member(expr)
        elif isinstance(expr, ConstantReference):
            return self.generate_constant_reference(expr)
        elif isinstance(expr, ParenthesizedExpression):
            return self._wrap(expr.operand, '(', ')')
        elif isinstance(expr, NegateExpression):
            return self._wrap(expr.operand, '-', '')
        elif isinstance(expr, SpreadElement):
            return self._wrap(expr.operand, '...', '')
        elif isinstance(expr, ArrayLiteral):
            return self.generate_array_literal(expr.elements)
        elif isinstance(expr, ObjectCreation):
            return self.generate_object_creation(expr)

        # Invocations, binary/conditional operators and opaque source text
        return UNSUPPORTED

    def _wrap(self, operand: Expression, prefix: str, suffix: str) -> TranslationResult:
        inner = self.translate(operand)
        if inner is UNSUPPORTED:
            return UNSUPPORTED
        return f'{prefix}{inner}{suffix}'

    # =========================================================================
    # LEAVES
    # =========================================================================

    def generate_literal(self, lit: Literal) -> str:
        """Generate TypeScript code for a literal token.

        Tokens are kept verbatim ('a' char literals are one-character strings
        in TypeScript); only numeric type suffixes are dropped.
        """
        if lit.kind == 'number' and not lit.text.lower().startswith('0x'):
            match = _NUMERIC_SUFFIX_RE.match(lit.text)
            if match:
                return match.group(1)
        return lit.text

    def generate_enum_member(self, ref: EnumMemberReference) -> str:
        """Generate Enum.Member and remember the enum as a value import."""
        self._pending_imports.append(ref.enum_name)
        return f'{ref.enum_name}.{ref.member_name}'

    def generate_constant_reference(self, ref: ConstantReference) -> TranslationResult:
        """Inline the resolved value of a compile-time constant."""
        if ref.value is None:
            return UNSUPPORTED
        if isinstance(ref.value, (str, int, float, bool)):
            return self._format_value(ref.value)
        return UNSUPPORTED

    # =========================================================================
    # COLLECTIONS AND OBJECTS
    # =========================================================================

    def generate_array_literal(self, elements: List[Expression]) -> TranslationResult:
        """Generate [e1, e2, ...]."""
        rendered = []
        for element in elements:
            value = self.translate(element)
            if value is UNSUPPORTED:
                return UNSUPPORTED
            rendered.append(value)
        return f'[{", ".join(rendered)}]'

    def generate_object_creation(self, creation: ObjectCreation) -> TranslationResult:
        """Generate an object literal for property initializers, an array otherwise."""
        if creation.properties:
            return self._generate_object_literal(creation)
        if creation.elements:
            return self.generate_array_literal(creation.elements)
        if isinstance(creation.type, GenericType) and creation.type.name in LINEAR_CONTAINERS:
            return '[]'
        return '{}'

    def _generate_object_literal(self, creation: ObjectCreation) -> TranslationResult:
        """Generate a multi-line object literal with camelCased keys.

        Nested multi-line values are re-indented one level.
        """
        lines = ['{']
        for prop in creation.properties:
            value = self.translate(prop.value)
            if value is UNSUPPORTED:
                return UNSUPPORTED
            key = self._format_key(to_member_case(prop.name))
            value = self._reindent(value, self._ctx.indent_str)
            lines.append(f'{self._ctx.indent_str}{key}: {value},')
        lines.append('}')
        return '\n'.join(lines)
