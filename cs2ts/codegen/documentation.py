"""
Documentation generation for C# to TypeScript generation.

Turns XML documentation comments (/// <summary>...</summary>) into JSDoc
blocks and merges in the wire-format hints raised by the type converter.
"""

import textwrap
import xml.etree.ElementTree as ET
from typing import List, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext

from .base import BaseGenerator
from ..type_system.mappings import hint_line


# Sections rendered, in order
DOC_SECTIONS = ('summary', 'remarks')


def _strip_comment_markers(raw: str) -> str:
    """Remove leading /// markers when the raw comment still carries them."""
    lines = []
    for line in raw.splitlines():
        stripped = line.lstrip()
        if stripped.startswith('///'):
            stripped = stripped[3:]
            if stripped.startswith(' '):
                stripped = stripped[1:]
            lines.append(stripped)
        else:
            lines.append(line)
    return '\n'.join(lines)


def _cref_name(cref: str) -> str:
    """T:MyApp.Models.User -> User"""
    name = cref.split(':', 1)[-1]
    return name.rsplit('.', 1)[-1]


def _element_text(element: ET.Element) -> str:
    """Flatten an XML doc element to text, resolving inline tags."""
    parts = [element.text or '']
    for child in element:
        tag = child.tag
        if tag in ('see', 'seealso'):
            cref = child.get('cref') or child.get('langword') or child.get('href') or ''
            inner = _element_text(child).strip()
            parts.append(inner or _cref_name(cref))
        elif tag in ('paramref', 'typeparamref'):
            parts.append(child.get('name', ''))
        elif tag == 'c':
            parts.append(f'`{_element_text(child)}`')
        elif tag == 'br':
            parts.append('\n')
        elif tag == 'para':
            parts.append(f'\n{_element_text(child).strip()}\n')
        else:
            parts.append(_element_text(child))
        parts.append(child.tail or '')
    return ''.join(parts)


def _clean_lines(text: str) -> List[str]:
    """Dedent, strip trailing spaces and drop leading/trailing blank lines."""
    lines = text.splitlines() or ['']
    # The first line shares its line with the opening tag
    rest = textwrap.dedent('\n'.join(lines[1:])).splitlines()
    lines = [lines[0].strip()] + [line.rstrip() for line in rest]
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def extract_sections(raw: Optional[str]) -> List[List[str]]:
    """Extract the non-empty summary/remarks sections of a raw doc comment.

    Malformed XML yields no sections.
    """
    if not raw or not raw.strip():
        return []
    try:
        root = ET.fromstring(f'<doc>{_strip_comment_markers(raw)}</doc>')
    except ET.ParseError:
        return []

    elements = [root.find(name) for name in DOC_SECTIONS]
    if all(element is None for element in elements):
        # Plain text without any section tag is the summary
        lines = _clean_lines(root.text or '') if len(root) == 0 else []
        return [lines] if lines else []

    sections = []
    for element in elements:
        if element is None:
            continue
        lines = _clean_lines(_element_text(element))
        if lines:
            sections.append(lines)
    return sections


class DocumentationGenerator(BaseGenerator):
    """
    Generates JSDoc blocks.

    The block holds the summary, then the remarks, then the type hints,
    with one blank line between each present part.
    """

    def __init__(self, ctx: 'CodeGenerationContext'):
        super().__init__(ctx)

    def render(self, documentation: Optional[str], hints: Sequence[str] = ()) -> Optional[str]:
        """Render a documentation block at the current indentation.

        Args:
            documentation: The raw XML doc comment, if any
            hints: Hint keys raised while mapping the member's type

        Returns:
            The comment block (no trailing newline), or None when there is nothing to say
        """
        parts = extract_sections(documentation)
        hint_lines = [hint_line(h) for h in hints]
        if hint_lines:
            parts.append(hint_lines)
        if not parts:
            return None

        indent = self.indent()
        body = []
        for i, part in enumerate(parts):
            if i > 0:
                body.append(f'{indent} *')
            for line in part:
                body.append(f'{indent} * {line}' if line.strip() else f'{indent} *')

        return '\n'.join([f'{indent}/**'] + body + [f'{indent} */'])
