"""
Diagnostic/warning system for the generator.

Collects and reports warnings about declarations, fields and types that were
skipped or degraded during generation. Nothing in the generator raises for
input it cannot convert; it records a diagnostic here instead and moves on.
"""

import sys
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class DiagnosticSeverity(Enum):
    """Severity levels for generator diagnostics."""
    WARNING = 'warning'
    INFO = 'info'


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    severity: DiagnosticSeverity
    code: str
    message: str
    file_path: str = ''
    construct: str = ''  # e.g., 'constant', 'import', 'type'

    def __str__(self) -> str:
        if self.file_path:
            return f'[{self.severity.value}] {self.file_path}: {self.message} ({self.code})'
        return f'[{self.severity.value}] {self.message} ({self.code})'


class TranspilerDiagnostics:
    """
    Collects generator warnings/diagnostics during a run.

    Both generation phases may run on several threads, so appends are
    serialized with a lock.

    Usage:
        diag = TranspilerDiagnostics()
        diag.warn_unsupported_expression("Limits", "Max", "Models/Limits.cs")
        # ... after generation ...
        diag.print_summary()
    """

    def __init__(self, verbose: bool = False):
        self._diagnostics: List[Diagnostic] = []
        self._verbose = verbose
        self._lock = threading.Lock()

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Get all collected diagnostics."""
        with self._lock:
            return list(self._diagnostics)

    @property
    def warnings(self) -> List[Diagnostic]:
        """Get only warning-level diagnostics."""
        return [d for d in self.diagnostics if d.severity == DiagnosticSeverity.WARNING]

    def _add(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            self._diagnostics.append(diagnostic)

    # =========================================================================
    # SPECIFIC WARNING METHODS
    # =========================================================================

    def warn_unsupported_expression(
        self,
        declaration_name: str,
        field_name: str,
        file_path: str = '',
    ) -> None:
        """Warn that a constant field was dropped because its initializer cannot be translated."""
        self._add(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W001',
            message=f'Initializer of "{declaration_name}.{field_name}" is not a translatable '
                    f'constant expression; the field was omitted.',
            file_path=file_path,
            construct='constant',
        ))

    def warn_unresolved_import(
        self,
        name: str,
        file_path: str = '',
    ) -> None:
        """Warn that an imported name is not in the registry and a same-directory path was guessed."""
        self._add(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W002',
            message=f'"{name}" is not a generated declaration; assuming ./{name}.',
            file_path=file_path,
            construct='import',
        ))

    def warn_unsupported_type(
        self,
        type_description: str,
        detail: str = '',
        file_path: str = '',
    ) -> None:
        """Warn that a type shape has no TypeScript mapping and was rendered as unknown."""
        msg = f'Unsupported type: {type_description}'
        if detail:
            msg += f' ({detail})'
        self._add(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W003',
            message=msg,
            file_path=file_path,
            construct='type',
        ))

    def warn_duplicate_declaration(
        self,
        name: str,
        previous_path: str,
        new_path: str,
    ) -> None:
        """Warn that a declared name was registered twice; the later path wins."""
        self._add(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W004',
            message=f'"{name}" is declared in both {previous_path} and {new_path}; '
                    f'imports will resolve to {new_path}.',
            file_path=new_path,
            construct='duplicate declaration',
        ))

    def warn_duplicate_enum_value(
        self,
        enum_name: str,
        value: str,
        kept_member: str,
        dropped_member: str,
        file_path: str = '',
    ) -> None:
        """Warn that two enum members share a value; the reverse map keeps the first."""
        self._add(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W005',
            message=f'{enum_name}.{dropped_member} duplicates value {value} of '
                    f'{enum_name}.{kept_member}; the reverse lookup maps it to "{kept_member}".',
            file_path=file_path,
            construct='enum',
        ))

    def warn_unresolved_enum_value(
        self,
        enum_name: str,
        member_name: str,
        file_path: str = '',
    ) -> None:
        """Warn that an enum member's value could not be computed; the member was omitted."""
        self._add(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W007',
            message=f'Value of "{enum_name}.{member_name}" is not a constant integer expression; '
                    f'the member was omitted.',
            file_path=file_path,
            construct='enum',
        ))

    def warn_unknown_declaration_kind(
        self,
        name: str,
        file_path: str = '',
    ) -> None:
        """Warn that a declaration has a kind with no rendering path."""
        self._add(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W006',
            message=f'Declaration "{name}" has an unknown kind and was skipped.',
            file_path=file_path,
            construct='declaration',
        ))

    def info_file_generated(
        self,
        file_path: str,
        declaration_count: int,
    ) -> None:
        """Info that a file was generated."""
        self._add(Diagnostic(
            severity=DiagnosticSeverity.INFO,
            code='I001',
            message=f'Generated {declaration_count} declaration(s)',
            file_path=file_path,
            construct='file',
        ))

    # =========================================================================
    # REPORTING
    # =========================================================================

    def _count_by_construct(self) -> Dict[str, List[Diagnostic]]:
        by_construct: Dict[str, List[Diagnostic]] = {}
        for w in self.warnings:
            by_construct.setdefault(w.construct or 'other', []).append(w)
        return by_construct

    def print_summary(self, file=None) -> None:
        """Print a summary of all diagnostics to stderr (or specified file)."""
        if file is None:
            file = sys.stderr

        diagnostics = self.diagnostics
        if not diagnostics:
            return

        warnings = [d for d in diagnostics if d.severity == DiagnosticSeverity.WARNING]
        infos = [d for d in diagnostics if d.severity == DiagnosticSeverity.INFO]

        if warnings:
            print(f'\nGenerator warnings ({len(warnings)}):', file=file)
            for construct, diags in sorted(self._count_by_construct().items()):
                print(f'  {construct}: {len(diags)} occurrence(s)', file=file)
                if self._verbose:
                    for d in diags:
                        print(f'    {d}', file=file)

        if infos and self._verbose:
            print(f'\nGenerator info ({len(infos)}):', file=file)
            for d in infos:
                print(f'  {d}', file=file)
