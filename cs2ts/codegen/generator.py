"""
TypeScript code generator for one output file.

The TypeScriptCodeGenerator wires the specialized generators to a shared
per-file context, renders every declaration of a source file and prepends the
finalized import header.
"""

from typing import Dict, List, Optional

from .context import CodeGenerationContext
from .definition import DefinitionGenerator
from .diagnostics import TranspilerDiagnostics
from .documentation import DocumentationGenerator
from .expression import ExpressionGenerator
from .imports import ImportGenerator
from .type_converter import TypeConverter
from ..declarations.ast_nodes import Declaration
from ..type_system import TypeRegistry


class TypeScriptCodeGenerator:
    """
    Generates TypeScript code from the declarations of one source file.

    A generator owns its context exclusively; it is safe to run one generator
    per file on separate threads as long as they only share the sealed
    registry and the diagnostics collector.
    """

    def __init__(
        self,
        registry: Optional[TypeRegistry] = None,
        current_file_path: str = '',
        primitive_overrides: Optional[Dict[str, str]] = None,
        hint_overrides: Optional[Dict[str, str]] = None,
        diagnostics: Optional[TranspilerDiagnostics] = None,
    ):
        self._ctx = CodeGenerationContext.from_registry(
            registry,
            current_file_path=current_file_path,
            primitive_overrides=primitive_overrides,
            hint_overrides=hint_overrides,
            diagnostics=diagnostics,
        )

        # Specialized generators
        self._type_converter = TypeConverter(self._ctx)
        self._expr_generator = ExpressionGenerator(self._ctx)
        self._doc_generator = DocumentationGenerator(self._ctx)
        self._definition_generator = DefinitionGenerator(
            self._ctx, self._type_converter, self._expr_generator, self._doc_generator
        )
        self._import_generator = ImportGenerator(self._ctx)

    @property
    def context(self) -> CodeGenerationContext:
        return self._ctx

    def generate(self, declarations: List[Declaration]) -> Optional[str]:
        """Generate the content of one output file.

        Args:
            declarations: The declarations of one source file, in source order

        Returns:
            The file content, or None when no declaration renders any text
        """
        self._ctx.reset_for_file(
            self._ctx.current_file_path, {d.name for d in declarations}
        )

        snippets = []
        for declaration in declarations:
            code = self._definition_generator.generate(declaration)
            if code:
                snippets.append(code)

        if not snippets:
            return None

        header = self._import_generator.generate()
        return header + '\n\n'.join(snippets) + '\n'
