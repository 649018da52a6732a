"""
Import generation for C# to TypeScript generation.

This module turns the import set accumulated on a file's context into the
import header of the generated file, resolving every imported declaration to
a path relative to the file being written.
"""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext

from ..type_system.registry import strip_extension


@dataclass
class ImportEntry:
    """One resolved import of the header."""
    name: str
    path: str
    type_only: bool

    def render(self) -> str:
        keyword = 'import type' if self.type_only else 'import'
        return f"{keyword} {{ {self.name} }} from '{self.path}';"


def resolve_relative_path(from_file: str, to_file: str) -> str:
    """Compute the relative import path between two project-relative files.

    Extensions are ignored. Directory segments are compared case-insensitively.

    Args:
        from_file: The file that contains the import (e.g., "Models/Orders/Order.cs")
        to_file: The file that declares the imported name (e.g., "Models/User")

    Returns:
        The relative import path string (e.g., "../User")
    """
    current_parts = PurePosixPath(strip_extension(from_file)).parent.parts
    target = PurePosixPath(strip_extension(to_file))
    target_parts = target.parent.parts

    # Find common prefix length
    common_len = 0
    for c, t in zip(current_parts, target_parts):
        if c.lower() != t.lower():
            break
        common_len += 1

    # Go up from current dir, then down to target
    ups = len(current_parts) - common_len
    downs = list(target_parts[common_len:]) + [target.name]

    if ups == 0:
        return './' + '/'.join(downs)
    return '../' * ups + '/'.join(downs)


class ImportGenerator:
    """
    Generates TypeScript import statements.

    Finalizing the context's import set:
    - drops the names declared in the file itself
    - orders the remaining names lexicographically
    - resolves each name through the registry (or its fixed module)
    - marks names with any value usage as value imports
    """

    def __init__(self, ctx: 'CodeGenerationContext'):
        """
        Initialize the import generator.

        Args:
            ctx: The code generation context
        """
        self._ctx = ctx

    def finalize(self) -> List[ImportEntry]:
        """Resolve the file's import set into ordered import entries."""
        entries = []
        for name in sorted(self._ctx.imports):
            if name in self._ctx.declared_names:
                continue
            entries.append(ImportEntry(
                name=name,
                path=self._get_import_path(name),
                type_only=self._ctx.is_type_only(name),
            ))
        return entries

    def generate(self) -> str:
        """Generate the import header for the current file.

        Returns:
            The import statements followed by a blank line, or '' when nothing is imported
        """
        entries = self.finalize()
        if not entries:
            return ''
        lines = [entry.render() for entry in entries]
        lines.append('')
        return '\n'.join(lines) + '\n'

    def _get_import_path(self, name: str) -> str:
        """Compute the path a name is imported from.

        Args:
            name: The imported name

        Returns:
            The module specifier or relative import path string
        """
        module = self._ctx.external_modules.get(name)
        if module is not None:
            return module

        registry = self._ctx.registry
        target_path = registry.get_path(name) if registry is not None else None

        if target_path is None:
            # Fallback: same directory
            self._ctx.diagnostics.warn_unresolved_import(name, self._ctx.current_file_path)
            return f'./{name}'

        return resolve_relative_path(self._ctx.current_file_path, f'{target_path}.ts')
