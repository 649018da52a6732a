"""
Base generator class with shared utilities.

This module provides the BaseGenerator class that contains common utilities
used across all specialized generator classes in the code generation pipeline.
"""

import re
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext


_IDENTIFIER_RE = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')


class BaseGenerator:
    """
    Base class for all code generators.

    Provides shared utilities for:
    - Indentation management
    - Value formatting
    - Object key formatting
    """

    def __init__(self, ctx: 'CodeGenerationContext'):
        """
        Initialize the base generator.

        Args:
            ctx: The code generation context containing all state
        """
        self._ctx = ctx

    # =========================================================================
    # INDENTATION
    # =========================================================================

    def indent(self) -> str:
        """Return the current indentation string."""
        return self._ctx.indent()

    @property
    def indent_level(self) -> int:
        """Get the current indentation level."""
        return self._ctx.indent_level

    @indent_level.setter
    def indent_level(self, value: int):
        """Set the current indentation level."""
        self._ctx.indent_level = value

    def _reindent(self, text: str, prefix: str) -> str:
        """Prefix every line after the first; used to nest multi-line values."""
        return text.replace('\n', '\n' + prefix)

    # =========================================================================
    # VALUE FORMATTING
    # =========================================================================

    def _quote_string(self, value: str) -> str:
        """Render a Python string as a single-quoted TypeScript string literal."""
        escaped = (
            value.replace('\\', '\\\\')
            .replace("'", "\\'")
            .replace('\n', '\\n')
            .replace('\r', '\\r')
            .replace('\t', '\\t')
        )
        return f"'{escaped}'"

    def _format_value(self, value: Any) -> str:
        """Render a resolved constant value as a TypeScript literal."""
        if value is None:
            return 'null'
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if isinstance(value, (int, float)):
            return repr(value)
        return self._quote_string(str(value))

    # =========================================================================
    # OBJECT KEYS
    # =========================================================================

    def _is_identifier(self, name: str) -> bool:
        """Check if name can be used as a bare object key / property name."""
        return bool(_IDENTIFIER_RE.match(name))

    def _format_key(self, name: str) -> str:
        """Quote an object key when it is not a valid identifier."""
        if self._is_identifier(name):
            return name
        return self._quote_string(name)
