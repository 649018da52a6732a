"""
Code generation context for the TypeScript code generator.

This module provides a context class that holds all state needed while one
output file is generated, separating state management from the generation
logic. A context is created per file and never shared between files; the only
shared piece is the sealed, read-only TypeRegistry it points to.
"""

from dataclasses import dataclass, field
from enum import Flag, auto
from typing import Dict, List, Optional, Set

from ..type_system import TypeRegistry
from .diagnostics import TranspilerDiagnostics


class ImportUsage(Flag):
    """How an imported name is used. Flags are only ever added, never removed."""
    TYPE = auto()
    VALUE = auto()


@dataclass
class CodeGenerationContext:
    """
    Holds all state needed during TypeScript generation of one file.

    The import set (imports + external_modules) accumulates for the whole
    file; declaration-scoped fields are reset by reset_for_declaration().
    """

    # Indentation state
    indent_level: int = 0
    indent_str: str = '  '

    # File context
    current_file_path: str = ''
    declared_names: Set[str] = field(default_factory=set)

    # Declaration context
    current_declaration: str = ''
    current_type_parameters: Set[str] = field(default_factory=set)

    # Import tracking: name -> usage flags
    imports: Dict[str, ImportUsage] = field(default_factory=dict)
    # Names that come from a fixed module instead of a generated file
    external_modules: Dict[str, str] = field(default_factory=dict)

    # Documentation hints raised while mapping the current member's type
    pending_hints: List[str] = field(default_factory=list)

    # Per-run type table additions
    primitive_overrides: Dict[str, str] = field(default_factory=dict)
    hint_overrides: Dict[str, str] = field(default_factory=dict)

    # Reference to the sealed registry built in the first pass
    _registry: Optional[TypeRegistry] = None

    # Diagnostics collector
    _diagnostics: Optional[TranspilerDiagnostics] = None

    @property
    def registry(self) -> Optional[TypeRegistry]:
        return self._registry

    @property
    def diagnostics(self) -> TranspilerDiagnostics:
        """Get the diagnostics collector, creating one if needed."""
        if self._diagnostics is None:
            self._diagnostics = TranspilerDiagnostics()
        return self._diagnostics

    def indent(self) -> str:
        """Return the current indentation string."""
        return self.indent_str * self.indent_level

    # =========================================================================
    # IMPORTS
    # =========================================================================

    def mark_import(self, name: str, usage: ImportUsage = ImportUsage.TYPE, module: Optional[str] = None) -> None:
        """Record that the file needs name; usage is unioned with earlier usages."""
        self.imports[name] = self.imports.get(name, usage) | usage
        if module is not None:
            self.external_modules[name] = module

    def is_type_only(self, name: str) -> bool:
        """Check whether every recorded usage of name is in type position."""
        return ImportUsage.VALUE not in self.imports.get(name, ImportUsage.TYPE)

    # =========================================================================
    # DOCUMENTATION HINTS
    # =========================================================================

    def add_hint(self, hint: str) -> None:
        if hint not in self.pending_hints:
            self.pending_hints.append(hint)

    def take_hints(self) -> List[str]:
        """Return the hints gathered so far and start a new collection."""
        hints = self.pending_hints
        self.pending_hints = []
        return hints

    # =========================================================================
    # RESETS
    # =========================================================================

    def reset_for_file(self, file_path: str, declared_names: Set[str]) -> None:
        """Reset state for a new file."""
        self.current_file_path = file_path
        self.declared_names = set(declared_names)
        self.imports = {}
        self.external_modules = {}
        self.pending_hints = []
        self.indent_level = 0

    def reset_for_declaration(self, name: str, type_parameters: Optional[List[str]] = None) -> None:
        """Reset state for a new declaration."""
        self.current_declaration = name
        self.current_type_parameters = set(type_parameters or [])
        self.pending_hints = []

    @classmethod
    def from_registry(
        cls,
        registry: Optional[TypeRegistry],
        current_file_path: str = '',
        declared_names: Optional[Set[str]] = None,
        primitive_overrides: Optional[Dict[str, str]] = None,
        hint_overrides: Optional[Dict[str, str]] = None,
        diagnostics: Optional[TranspilerDiagnostics] = None,
    ) -> 'CodeGenerationContext':
        """
        Create a context from a TypeRegistry.

        Args:
            registry: The sealed registry from the first pass
            current_file_path: Project-relative path of the source file
            declared_names: Names declared in that file
            primitive_overrides: Per-run additions to the primitive table
            hint_overrides: Per-run additions to the hint table
            diagnostics: Shared diagnostics collector of the run

        Returns:
            A new CodeGenerationContext instance
        """
        return cls(
            current_file_path=current_file_path,
            declared_names=set(declared_names or ()),
            primitive_overrides=dict(primitive_overrides or {}),
            hint_overrides=dict(hint_overrides or {}),
            _registry=registry,
            _diagnostics=diagnostics,
        )
