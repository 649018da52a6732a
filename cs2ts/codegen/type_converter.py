"""
Type conversion utilities for code generation.

This module provides the TypeConverter class that handles C# to TypeScript
type conversions during code generation, with context-awareness for tracking
imports and documentation hints.
"""

from typing import Iterable, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext

from .base import BaseGenerator
from .context import ImportUsage
from ..declarations.ast_nodes import (
    ArrayType,
    CapabilityTag,
    FunctionType,
    GenericType,
    NamedType,
    NullableType,
    PrimitiveType,
    TypeReference,
)
from ..type_system.mappings import (
    ACTION_DELEGATE,
    CAPABILITY_TYPES,
    FUNC_DELEGATE,
    LINEAR_CONTAINERS,
    MAP_CONTAINERS,
    MAX_ACTION_ARGUMENTS,
    MAX_FUNC_ARGUMENTS,
    NULLABLE_GENERIC,
    UNSUPPORTED_TYPE,
    hint_for_primitive,
    primitive_to_ts,
)


class TypeConverter(BaseGenerator):
    """
    Handles C# to TypeScript type conversions.

    This class provides context-aware type conversion that:
    - Converts type reference trees to TypeScript type expressions
    - Applies member capability overrides (render-node, dom-element)
    - Tracks referenced declarations for import generation
    - Raises documentation hints for wire-format primitives
    """

    def __init__(self, ctx: 'CodeGenerationContext'):
        """
        Initialize the type converter.

        Args:
            ctx: The code generation context
        """
        super().__init__(ctx)

    # =========================================================================
    # MAIN TYPE CONVERSION
    # =========================================================================

    def to_ts(
        self,
        type_ref: Optional[TypeReference],
        capabilities: Iterable[CapabilityTag] = (),
    ) -> str:
        """Convert a type reference to a TypeScript type.

        A capability tag on the member takes precedence over the declared
        type. Otherwise the reference tree is converted recursively.

        Args:
            type_ref: The type reference to convert
            capabilities: Capability tags of the member owning the type

        Returns:
            The TypeScript type string
        """
        capabilities = set(capabilities)
        for tag in (CapabilityTag.RENDER_NODE, CapabilityTag.DOM_ELEMENT):
            if tag in capabilities:
                ts_type, module = CAPABILITY_TYPES[tag.value]
                if module is not None:
                    self._ctx.mark_import(ts_type, ImportUsage.TYPE, module=module)
                return ts_type

        if type_ref is None:
            return UNSUPPORTED_TYPE
        return self.convert(type_ref)

    def convert(self, type_ref: TypeReference) -> str:
        """Convert a type reference tree (no capability handling)."""
        if isinstance(type_ref, NullableType):
            return f'{self.convert(type_ref.inner)} | null'
        elif isinstance(type_ref, ArrayType):
            return self._array_of(type_ref.element)
        elif isinstance(type_ref, GenericType):
            return self._convert_generic(type_ref)
        elif isinstance(type_ref, FunctionType):
            return self._function_type(type_ref.parameter_types, type_ref.return_type)
        elif isinstance(type_ref, PrimitiveType):
            return self._convert_primitive(type_ref.name)
        elif isinstance(type_ref, NamedType):
            return self._convert_named(type_ref)

        self._ctx.diagnostics.warn_unsupported_type(
            type(type_ref).__name__, file_path=self._ctx.current_file_path
        )
        return UNSUPPORTED_TYPE

    # =========================================================================
    # GENERICS
    # =========================================================================

    def _convert_generic(self, generic: GenericType) -> str:
        name = generic.name
        args = generic.arguments

        if name == NULLABLE_GENERIC and len(args) == 1:
            return f'{self.convert(args[0])} | null'

        if name in LINEAR_CONTAINERS and len(args) == 1:
            return self._array_of(args[0])

        if name in MAP_CONTAINERS and len(args) == 2:
            key = self.convert(args[0])
            value = self.convert(args[1])
            return f'Partial<Record<{key}, {value}>>'

        if name == ACTION_DELEGATE:
            if len(args) > MAX_ACTION_ARGUMENTS:
                return self._unsupported_delegate(generic)
            return self._function_type(args, None)

        if name == FUNC_DELEGATE and args:
            if len(args) > MAX_FUNC_ARGUMENTS:
                return self._unsupported_delegate(generic)
            return self._function_type(args[:-1], args[-1])

        # Some other generic declaration: Page<User> -> Page<User>
        base = self._convert_named(NamedType(name))
        rendered_args = ', '.join(self.convert(a) for a in args)
        return f'{base}<{rendered_args}>' if args else base

    def _unsupported_delegate(self, generic: GenericType) -> str:
        self._ctx.diagnostics.warn_unsupported_type(
            f'{generic.name}<{len(generic.arguments)} type arguments>',
            detail='delegate arity is not supported',
            file_path=self._ctx.current_file_path,
        )
        return UNSUPPORTED_TYPE

    def _array_of(self, element: TypeReference) -> str:
        """Render T[]; unions and function types need parentheses."""
        inner = self.convert(element)
        if self._renders_as_union_or_function(element, inner):
            return f'({inner})[]'
        return f'{inner}[]'

    def _renders_as_union_or_function(self, type_ref: TypeReference, rendered: str) -> bool:
        if isinstance(type_ref, (NullableType, FunctionType)):
            return True
        if isinstance(type_ref, GenericType):
            args = len(type_ref.arguments)
            if type_ref.name == NULLABLE_GENERIC:
                return args == 1
            if type_ref.name == ACTION_DELEGATE:
                return args <= MAX_ACTION_ARGUMENTS
            if type_ref.name == FUNC_DELEGATE:
                return 0 < args <= MAX_FUNC_ARGUMENTS
            return False
        if isinstance(type_ref, (PrimitiveType, NamedType)):
            # Table entries (including per-run overrides) are flat strings
            return ' | ' in rendered or ' => ' in rendered
        return False

    def _function_type(
        self,
        parameter_types: List[TypeReference],
        return_type: Optional[TypeReference],
    ) -> str:
        """Render (arg: A) => R; a single parameter is named arg, several arg1..argN."""
        returns = self.convert(return_type) if return_type is not None else 'void'
        if len(parameter_types) == 1:
            params = f'arg: {self.convert(parameter_types[0])}'
        else:
            params = ', '.join(
                f'arg{i}: {self.convert(p)}' for i, p in enumerate(parameter_types, start=1)
            )
        return f'({params}) => {returns}'

    # =========================================================================
    # NAMES
    # =========================================================================

    def _convert_primitive(self, name: str) -> str:
        ts_type = primitive_to_ts(name, self._ctx.primitive_overrides)
        if ts_type is None:
            self._ctx.diagnostics.warn_unsupported_type(
                name, detail='unknown primitive', file_path=self._ctx.current_file_path
            )
            return UNSUPPORTED_TYPE

        hint = hint_for_primitive(name, self._ctx.hint_overrides)
        if hint:
            self._ctx.add_hint(hint)
        return ts_type

    def _convert_named(self, named: NamedType) -> str:
        """Convert a named type; capitalized bare names are other generated declarations."""
        name = named.name

        if not named.namespace and primitive_to_ts(name, self._ctx.primitive_overrides) is not None:
            return self._convert_primitive(name)

        if name in self._ctx.current_type_parameters:
            return name

        if name == ACTION_DELEGATE and not named.namespace:
            return self._function_type([], None)

        if named.namespace:
            return named.qualified_name

        if name[:1].isupper():
            self._ctx.mark_import(name, ImportUsage.TYPE)
        return name
