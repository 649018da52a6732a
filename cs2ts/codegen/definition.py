"""
Definition generation for C# to TypeScript generation.

This module handles the generation of TypeScript code from declarations:
structured types (interfaces), enums (frozen const objects with a union type
and a reverse lookup) and constant holders (exported consts).
"""

import operator
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext
    from .documentation import DocumentationGenerator
    from .expression import ExpressionGenerator
    from .type_converter import TypeConverter

from .base import BaseGenerator
from .context import ImportUsage
from .expression import UNSUPPORTED
from .naming import to_member_case
from ..declarations.ast_nodes import (
    BinaryExpression,
    ConstantReference,
    Declaration,
    DeclarationKind,
    EnumMemberReference,
    Literal,
    Member,
    NegateExpression,
    ParenthesizedExpression,
)


# Operators allowed in enum member initializers
_INTEGER_OPERATORS = {
    '<<': operator.lshift,
    '>>': operator.rshift,
    '|': operator.or_,
    '&': operator.and_,
    '^': operator.xor,
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class DefinitionGenerator(BaseGenerator):
    """
    Generates TypeScript code from declarations.

    This class handles:
    - Structured types (as interfaces with an extends clause)
    - Enums (as const objects, a union type and a reverse lookup)
    - Constant holders (as exported consts)
    """

    def __init__(
        self,
        ctx: 'CodeGenerationContext',
        type_converter: 'TypeConverter',
        expr_generator: 'ExpressionGenerator',
        doc_generator: 'DocumentationGenerator',
    ):
        """
        Initialize the definition generator.

        Args:
            ctx: The code generation context
            type_converter: The type converter
            expr_generator: The expression generator for constant values
            doc_generator: The documentation generator
        """
        super().__init__(ctx)
        self._type_converter = type_converter
        self._expr = expr_generator
        self._docs = doc_generator

    # =========================================================================
    # DISPATCH
    # =========================================================================

    def generate(self, declaration: Declaration) -> str:
        """Generate TypeScript code for one declaration.

        Args:
            declaration: The declaration to render

        Returns:
            TypeScript code, or '' for a declaration with no rendering path
        """
        self._ctx.reset_for_declaration(declaration.name, declaration.type_parameters)

        if declaration.kind == DeclarationKind.STRUCTURED_TYPE:
            return self.generate_interface(declaration)
        elif declaration.kind == DeclarationKind.ENUM:
            return self.generate_enum(declaration)
        elif declaration.kind == DeclarationKind.CONSTANT_HOLDER:
            return self.generate_constants(declaration)

        self._ctx.diagnostics.warn_unknown_declaration_kind(
            declaration.name, self._ctx.current_file_path
        )
        return ''

    def _with_docs(self, lines: List[str], documentation: Optional[str], hints=()) -> None:
        block = self._docs.render(documentation, hints)
        if block:
            lines.append(block)

    # =========================================================================
    # STRUCTURED TYPES
    # =========================================================================

    def generate_interface(self, declaration: Declaration) -> str:
        """Generate a TypeScript interface.

        Args:
            declaration: The structured type declaration

        Returns:
            TypeScript interface code
        """
        lines = []
        self._with_docs(lines, declaration.documentation)

        header = f'export interface {declaration.name}'
        if declaration.type_parameters:
            header += f'<{", ".join(declaration.type_parameters)}>'
        if declaration.base_types:
            bases = [self._type_converter.convert(b) for b in declaration.base_types]
            self._ctx.take_hints()
            header += f' extends {", ".join(bases)}'
        lines.append(f'{header} {{')

        self.indent_level += 1
        for member in declaration.members:
            if member.is_static or member.is_const:
                continue
            lines.extend(self._generate_interface_member(member))
        self.indent_level -= 1

        lines.append('}')
        return '\n'.join(lines)

    def _generate_interface_member(self, member: Member) -> List[str]:
        lines = []
        ts_type = self._literal_member_type(member)
        if ts_type is None:
            ts_type = self._type_converter.to_ts(member.type, member.capabilities)

        self._with_docs(lines, member.documentation, self._ctx.take_hints())
        name = self._format_key(to_member_case(member.name))
        lines.append(f'{self.indent()}{name}: {ts_type};')
        return lines

    def _literal_member_type(self, member: Member) -> Optional[str]:
        """Singleton type of a computed property that always yields the same value.

        => "admin" becomes the type "admin"; => Role.Admin becomes
        typeof Role.Admin. Anything else falls back to the declared type.
        """
        if not member.is_computed or member.initializer is None:
            return None

        expr = member.initializer
        while isinstance(expr, ParenthesizedExpression):
            expr = expr.operand

        if isinstance(expr, Literal) and expr.kind in ('string', 'number', 'bool', 'char'):
            return self._expr.generate_literal(expr)
        if isinstance(expr, NegateExpression) and isinstance(expr.operand, Literal) and expr.operand.kind == 'number':
            return f'-{self._expr.generate_literal(expr.operand)}'
        if isinstance(expr, EnumMemberReference):
            self._ctx.mark_import(expr.enum_name, ImportUsage.VALUE)
            return f'typeof {expr.enum_name}.{expr.member_name}'
        return None

    # =========================================================================
    # ENUMS
    # =========================================================================

    def generate_enum(self, declaration: Declaration) -> str:
        """Generate the TypeScript form of an enum.

        Three exports share the enum's name space:
        - a frozen const object Name -> value
        - a union type over the object's values
        - a frozen reverse lookup value -> Name

        Args:
            declaration: The enum declaration

        Returns:
            TypeScript code
        """
        name = declaration.name
        values = self._resolve_enum_values(declaration)
        lines = []

        # Forward object
        self._with_docs(lines, declaration.documentation)
        lines.append(f'export const {name} = Object.freeze({{')
        self.indent_level += 1
        for member, value in values:
            self._with_docs(lines, member.documentation)
            lines.append(f'{self.indent()}{self._format_key(member.name)}: {self._format_value(value)},')
        self.indent_level -= 1
        lines.append('} as const);')
        lines.append('')

        # Union type
        lines.append(f'export type {name} = (typeof {name})[keyof typeof {name}];')
        lines.append('')

        # Reverse lookup
        lines.append(f'export const {name}Names = Object.freeze({{')
        seen: Dict[Any, str] = {}
        self.indent_level += 1
        for member, value in values:
            if value in seen:
                self._ctx.diagnostics.warn_duplicate_enum_value(
                    name, self._format_value(value), seen[value], member.name,
                    self._ctx.current_file_path,
                )
                continue
            seen[value] = member.name
            lines.append(f'{self.indent()}{self._reverse_key(value)}: {self._quote_string(member.name)},')
        self.indent_level -= 1
        lines.append(f'}} as Record<{name}, keyof typeof {name}>);')

        return '\n'.join(lines)

    def _reverse_key(self, value: Any) -> str:
        """Object key for a value; negative numbers need a computed key."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return self._format_key(str(value))
        if value < 0:
            return f'[{self._format_value(value)}]'
        return self._format_value(value)

    def _resolve_enum_values(self, declaration: Declaration) -> List[Tuple[Member, Any]]:
        """Compute each member's value.

        The resolver-provided value wins; then the initializer evaluated as a
        constant integer expression; a member without initializer takes the
        previous value plus one, starting at 0.

        A member whose value cannot be computed is omitted with a warning, and
        so is every implicit member counting on from it.
        """
        resolved = []
        known: Dict[str, Any] = {}
        next_value: Optional[int] = 0
        for member in declaration.members:
            value = member.value
            if value is None:
                if member.initializer is not None:
                    value = self._evaluate_enum_initializer(member.initializer, declaration.name, known)
                else:
                    value = next_value

            if value is None:
                self._ctx.diagnostics.warn_unresolved_enum_value(
                    declaration.name, member.name, self._ctx.current_file_path
                )
                next_value = None
                continue

            known[member.name] = value
            resolved.append((member, value))
            if _is_int(value):
                next_value = value + 1
        return resolved

    def _evaluate_enum_initializer(self, expr, enum_name: str, known: Dict[str, Any]) -> Optional[int]:
        """Evaluate literals, earlier members and integer operators (1 << 2, Read | Write)."""
        if isinstance(expr, ParenthesizedExpression):
            return self._evaluate_enum_initializer(expr.operand, enum_name, known)

        if isinstance(expr, NegateExpression):
            operand = self._evaluate_enum_initializer(expr.operand, enum_name, known)
            return -operand if operand is not None else None

        if isinstance(expr, Literal):
            if expr.kind != 'number':
                return None
            text = self._expr.generate_literal(expr).replace('_', '')
            for base in (0, 10):
                try:
                    return int(text, base)
                except ValueError:
                    continue
            return None

        if isinstance(expr, EnumMemberReference):
            value = known.get(expr.member_name) if expr.enum_name == enum_name else None
            return value if _is_int(value) else None

        if isinstance(expr, ConstantReference):
            value = expr.value if expr.value is not None else known.get(expr.name)
            return value if _is_int(value) else None

        if isinstance(expr, BinaryExpression):
            op = _INTEGER_OPERATORS.get(expr.operator)
            left = self._evaluate_enum_initializer(expr.left, enum_name, known)
            right = self._evaluate_enum_initializer(expr.right, enum_name, known)
            if op is None or left is None or right is None:
                return None
            if expr.operator in ('<<', '>>') and right < 0:
                return None
            return op(left, right)

        return None

    # =========================================================================
    # CONSTANT HOLDERS
    # =========================================================================

    def generate_constants(self, declaration: Declaration) -> str:
        """Generate one exported const per translatable static field.

        Fields whose initializer cannot be translated are omitted.

        Args:
            declaration: The constant holder declaration

        Returns:
            TypeScript const declarations
        """
        blocks = []
        for member in declaration.members:
            if not (member.is_const or (member.is_static and member.is_read_only)):
                continue
            if member.initializer is None:
                continue
            block = self.generate_constant(declaration, member)
            if block:
                blocks.append(block)
        return '\n\n'.join(blocks)

    def generate_constant(self, declaration: Declaration, member: Member) -> Optional[str]:
        """Generate a single exported const, or None when the initializer is unsupported."""
        value = self._expr.generate(member.initializer)
        if value is UNSUPPORTED:
            self._ctx.diagnostics.warn_unsupported_expression(
                declaration.name, member.name, self._ctx.current_file_path
            )
            return None

        self._ctx.take_hints()
        ts_type = self._type_converter.to_ts(member.type, member.capabilities)
        lines = []
        self._with_docs(lines, member.documentation, self._ctx.take_hints())
        lines.append(f'export const {member.name}: {ts_type} = {value};')
        return '\n'.join(lines)
