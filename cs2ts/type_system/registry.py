"""
Type registry for discovered declarations.

The TypeRegistry performs the first pass over all declarations of a run to
record where each declared name will be emitted, before any code generation
starts. Generation must only begin after seal() has been called.
"""

import threading
from pathlib import PurePosixPath
from typing import Dict, Iterable, Optional, TYPE_CHECKING

from ..declarations.ast_nodes import Declaration, DeclarationKind

if TYPE_CHECKING:
    from ..codegen.diagnostics import TranspilerDiagnostics


def strip_extension(path: str) -> str:
    """Normalize separators and drop the file extension (Models/User.cs -> Models/User)."""
    return str(PurePosixPath(path.replace('\\', '/')).with_suffix(''))


class TypeRegistry:
    """
    Registry of declarations discovered in the first pass.

    Records, per declared name, the output path without extension
    (project-relative, '/' separated). Declarations of unknown kind are not
    registered since they never produce output.

    Registration is serialized with a lock so the first pass may run on
    several threads. Duplicate names are last-write-wins. A registry serves a
    single run: once sealed it accepts no further registrations.
    """

    def __init__(self, diagnostics: Optional['TranspilerDiagnostics'] = None):
        self.declaration_paths: Dict[str, str] = {}
        self._diagnostics = diagnostics
        self._lock = threading.Lock()
        self._sealed = False

    # =========================================================================
    # PHASE 1: REGISTRATION
    # =========================================================================

    def register(self, name: str, source_path: str) -> None:
        """Register a declared name and the source file it is declared in."""
        path = strip_extension(source_path)
        with self._lock:
            if self._sealed:
                raise RuntimeError(f'Cannot register "{name}": the type registry is sealed')

            previous = self.declaration_paths.get(name)
            if previous is not None and previous != path and self._diagnostics:
                self._diagnostics.warn_duplicate_declaration(name, previous, path)

            self.declaration_paths[name] = path

    def discover_from_declaration(self, declaration: Declaration) -> None:
        """Register a single declaration, skipping kinds that render nothing."""
        if declaration.kind == DeclarationKind.UNKNOWN:
            return
        self.register(declaration.name, declaration.source_path)

    def discover_from_declarations(self, declarations: Iterable[Declaration]) -> None:
        """Register every declaration of an iterable."""
        for declaration in declarations:
            self.discover_from_declaration(declaration)

    def seal(self) -> None:
        """Close the first pass. Lookups are only allowed afterwards."""
        with self._lock:
            self._sealed = True

    # =========================================================================
    # PHASE 2: LOOKUP
    # =========================================================================

    def get_path(self, name: str) -> Optional[str]:
        """Get the output path (without extension) a name is declared in."""
        if not self._sealed:
            raise RuntimeError('The type registry must be sealed before it is queried')
        return self.declaration_paths.get(name)
