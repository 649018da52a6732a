"""
Code generation module for the C# to TypeScript generator.

This module provides TypeScript code generation from resolved declarations.
"""

from .context import CodeGenerationContext, ImportUsage
from .base import BaseGenerator
from .naming import to_member_case
from .type_converter import TypeConverter
from .expression import ExpressionGenerator, UNSUPPORTED
from .documentation import DocumentationGenerator, extract_sections
from .definition import DefinitionGenerator
from .imports import ImportGenerator, ImportEntry, resolve_relative_path
from .generator import TypeScriptCodeGenerator
from .diagnostics import TranspilerDiagnostics, Diagnostic, DiagnosticSeverity

__all__ = [
    'CodeGenerationContext',
    'ImportUsage',
    'BaseGenerator',
    'to_member_case',
    'TypeConverter',
    'ExpressionGenerator',
    'UNSUPPORTED',
    'DocumentationGenerator',
    'extract_sections',
    'DefinitionGenerator',
    'ImportGenerator',
    'ImportEntry',
    'resolve_relative_path',
    'TypeScriptCodeGenerator',
    'TranspilerDiagnostics',
    'Diagnostic',
    'DiagnosticSeverity',
]
