#!/usr/bin/env python3
"""
C# declarations to TypeScript type definitions.

This generator converts the data-shape declarations of a C# project (types,
enums and constant holders marked for conversion) into TypeScript interfaces,
frozen enum objects and exported constants, one .ts file per source file.

Key features:
- Interfaces with inheritance, generics and documentation
- Enums as frozen const objects with a union type and a reverse lookup
- Constant holders as exported consts
- Relative, type-only aware imports between generated files

Usage:
    python -m cs2ts declarations.json -o src/generated

The declarations are produced by a parsing front-end and handed over as JSON
(see cs2ts/declarations/loader.py). Generation runs in two phases:
- registration: every declaration records its output path in the TypeRegistry
- generation: each source file is rendered with its own context
"""

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from . import __version__
from .codegen import TranspilerDiagnostics, TypeScriptCodeGenerator
from .declarations import Declaration, load_declarations
from .type_system import TypeRegistry


DEFAULT_BANNER = (
    '// This file has been generated by cs2ts\n'
    '// Do not edit as it will be overwritten\n'
)


class DeclarationToTypeScriptTranspiler:
    """Main generator class that orchestrates the conversion process."""

    def __init__(
        self,
        output_dir: str = './ts-output',
        jobs: int = 1,
        banner: str = DEFAULT_BANNER,
        type_overrides: Union[str, Dict[str, Any], None] = None,
        verbose: bool = False,
    ):
        self.output_dir = Path(output_dir)
        self.jobs = max(1, jobs)
        self.banner = banner
        self.diagnostics = TranspilerDiagnostics(verbose=verbose)
        self.registry = TypeRegistry(self.diagnostics)

        # Per-run additions to the primitive and hint tables
        self.primitive_overrides: Dict[str, str] = {}
        self.hint_overrides: Dict[str, str] = {}
        if isinstance(type_overrides, dict):
            self._apply_type_overrides(type_overrides)
        elif type_overrides:
            self._load_type_overrides(type_overrides)

    def _load_type_overrides(self, overrides_file: str) -> None:
        """Load a type overrides JSON file."""
        path = Path(overrides_file)
        if not path.exists():
            print(f"Warning: Type overrides file not found: {overrides_file}")
            return
        try:
            with open(path, 'r') as f:
                config = json.load(f)
            self._apply_type_overrides(config)
        except (json.JSONDecodeError, AttributeError) as e:
            print(f"Warning: Failed to load {overrides_file}: {e}")

    def _apply_type_overrides(self, config: Dict[str, Any]) -> None:
        for name, ts_type in config.get('primitives', {}).items():
            self.primitive_overrides[name] = ts_type
        for name, hint in config.get('hints', {}).items():
            self.hint_overrides[name] = hint

    # =========================================================================
    # PHASES
    # =========================================================================

    @staticmethod
    def group_by_file(declarations: List[Declaration]) -> Dict[str, List[Declaration]]:
        """Group declarations by source file, keeping source order."""
        files: Dict[str, List[Declaration]] = {}
        for declaration in declarations:
            files.setdefault(declaration.source_path, []).append(declaration)
        return files

    def register(self, declarations: List[Declaration]) -> None:
        """Phase 1: record every declaration's output path, then seal the registry.

        Each call starts from a fresh registry, so one transpiler can run
        several times.
        """
        self.registry = TypeRegistry(self.diagnostics)
        files = self.group_by_file(declarations)
        if self.jobs > 1:
            with ThreadPoolExecutor(max_workers=self.jobs) as pool:
                list(pool.map(self.registry.discover_from_declarations, files.values()))
        else:
            for file_declarations in files.values():
                self.registry.discover_from_declarations(file_declarations)
        self.registry.seal()

    def transpile_file(self, source_path: str, declarations: List[Declaration]) -> Optional[str]:
        """Phase 2 for one source file: the generated content without banner."""
        generator = TypeScriptCodeGenerator(
            self.registry,
            current_file_path=source_path,
            primitive_overrides=self.primitive_overrides,
            hint_overrides=self.hint_overrides,
            diagnostics=self.diagnostics,
        )
        ts_code = generator.generate(declarations)
        if ts_code is not None:
            self.diagnostics.info_file_generated(source_path, len(declarations))
        return ts_code

    def output_path(self, source_path: str) -> Path:
        """Output file for a source file: same relative path, .ts extension."""
        return self.output_dir / Path(source_path.replace('\\', '/')).with_suffix('.ts')

    def transpile(self, declarations: List[Declaration]) -> Dict[str, str]:
        """Run both phases and return output path -> file content."""
        self.register(declarations)
        files = self.group_by_file(declarations)

        def run(item):
            source_path, file_declarations = item
            return source_path, self.transpile_file(source_path, file_declarations)

        if self.jobs > 1:
            with ThreadPoolExecutor(max_workers=self.jobs) as pool:
                rendered = list(pool.map(run, files.items()))
        else:
            rendered = [run(item) for item in files.items()]

        results = {}
        for source_path, ts_code in rendered:
            if ts_code is None:
                continue
            results[str(self.output_path(source_path))] = self.banner + ts_code
        return results

    # =========================================================================
    # OUTPUT
    # =========================================================================

    def clean_output_dir(self) -> None:
        """Delete generated .ts files and prune the directories left empty."""
        if not self.output_dir.is_dir():
            return
        for ts_file in list(self.output_dir.rglob('*.ts')):
            if ts_file.is_file():
                ts_file.unlink()
        # Deepest directories first so parents empty out before they are checked
        directories = sorted(
            (p for p in self.output_dir.rglob('*') if p.is_dir()),
            key=lambda p: len(p.parts),
            reverse=True,
        )
        for directory in directories:
            if not any(directory.iterdir()):
                directory.rmdir()

    def write_output(self, results: Dict[str, str]) -> None:
        """Write generated TypeScript files to disk."""
        for filepath, content in results.items():
            path = Path(filepath)
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w') as f:
                f.write(content)
            print(f"Written: {filepath}")


# =============================================================================
# CLI INTERFACE
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(
        prog='cs2ts',
        description='Generate TypeScript type definitions from C# declarations',
    )
    parser.add_argument('input', help='Declarations JSON file produced by the parsing front-end')
    parser.add_argument('-o', '--output', default='ts-output', help='Output directory')
    parser.add_argument('--stdout', action='store_true', help='Print to stdout instead of writing files')
    parser.add_argument('-j', '--jobs', type=int, default=1, help='Number of worker threads')
    parser.add_argument('--no-clean', action='store_true',
                        help='Keep existing .ts files in the output directory')
    parser.add_argument('--type-overrides', metavar='FILE',
                        help='JSON file with extra primitive type mappings and hints')
    parser.add_argument('-v', '--verbose', action='store_true', help='List every diagnostic')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    args = parser.parse_args(argv)

    try:
        declarations = load_declarations(args.input)
    except (OSError, ValueError) as e:
        print(f"Error: cannot read {args.input}: {e}")
        return 1

    transpiler = DeclarationToTypeScriptTranspiler(
        output_dir=args.output,
        jobs=args.jobs,
        type_overrides=args.type_overrides,
        verbose=args.verbose,
    )
    results = transpiler.transpile(declarations)

    if args.stdout:
        for filepath, content in results.items():
            print(f'// ===== {filepath} =====')
            print(content)
    else:
        if not args.no_clean:
            transpiler.clean_output_dir()
        transpiler.write_output(results)

    transpiler.diagnostics.print_summary()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
