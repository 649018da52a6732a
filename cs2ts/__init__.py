"""
C# to TypeScript type definition generator

This package converts resolved C# data-shape declarations into TypeScript
type definitions.

Module Structure:
- declarations/: Declaration model and JSON loader (Declaration, load_declarations)
- type_system/: Declaration registry and type tables (TypeRegistry, mappings)
- codegen/: Code generation (TypeScriptCodeGenerator + specialized generators)
- cs2ts.py: Two-phase orchestrator and command line interface

Usage:
    from cs2ts import DeclarationToTypeScriptTranspiler, load_declarations

    transpiler = DeclarationToTypeScriptTranspiler('src/generated')
    results = transpiler.transpile(load_declarations('declarations.json'))
    transpiler.write_output(results)
"""

__version__ = '1.0.0'

from .declarations import Declaration, load_declarations
from .type_system import TypeRegistry
from .codegen import TypeScriptCodeGenerator, TranspilerDiagnostics
from .cs2ts import DeclarationToTypeScriptTranspiler, DEFAULT_BANNER

__all__ = [
    'DeclarationToTypeScriptTranspiler',
    'DEFAULT_BANNER',
    'TypeScriptCodeGenerator',
    'TypeRegistry',
    'TranspilerDiagnostics',
    'Declaration',
    'load_declarations',
]
