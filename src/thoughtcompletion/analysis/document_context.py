"""Document context assembly.

Combines the extracted structure, the cursor classification and a bounded
window of surrounding text into the immutable ``DocumentContext`` snapshot
consumed by the prompt builder.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from thoughtcompletion.analysis.position import CursorPosition, detect_cursor_position
from thoughtcompletion.analysis.structure import (
    NodeType,
    StructureNode,
    column_to_index,
    extract_structure,
    line_at,
    split_lines,
)
from thoughtcompletion.models.document_type import DocumentType

# Window bounds; these keep prompt size independent of document length
CONTEXT_LINES_BEFORE = 20
CONTEXT_LINES_AFTER = 20
MAX_CONTEXT_CHARS = 1000


@dataclass(frozen=True)
class DocumentContext:
    """Snapshot of everything a single completion request needs.

    Attributes:
        document_type: Active document type, or None for general prompts.
        current_section: Content of the nearest header at or above the cursor.
        cursor_position: Authoritative completion mode for the cursor.
        preceding_structure: Structure nodes at or above the cursor line.
        current_depth: Level of the latest header or list item at or above
            the cursor (0 if none).
        text_before_cursor: At most the last 1000 characters of the 20-line
            window ending at the cursor.
        text_after_cursor: At most the first 1000 characters of the 20 lines
            after the cursor line.
        current_line: Full raw text of the cursor line.
    """

    document_type: DocumentType | None
    current_section: str | None
    cursor_position: CursorPosition
    preceding_structure: tuple[StructureNode, ...]
    current_depth: int
    text_before_cursor: str
    text_after_cursor: str
    current_line: str


def _nodes_up_to(
    structure: Iterable[StructureNode], cursor_line: int
) -> Iterable[StructureNode]:
    for node in structure:
        if node.line > cursor_line:
            break
        yield node


def find_current_section(
    structure: Iterable[StructureNode], cursor_line: int
) -> str | None:
    """Find the section header the cursor is within.

    Args:
        structure: Nodes in line order
        cursor_line: Zero-based cursor line

    Returns:
        Content of the last header with ``line <= cursor_line``, or None
    """
    current_header: str | None = None
    for node in _nodes_up_to(structure, cursor_line):
        if node.type == NodeType.HEADER:
            current_header = node.content
    return current_header


def calculate_depth(structure: Iterable[StructureNode], cursor_line: int) -> int:
    """Nesting depth implied by the latest header or list item before the cursor."""
    depth = 0
    for node in _nodes_up_to(structure, cursor_line):
        if node.type == NodeType.HEADER or node.is_list_item:
            depth = node.level
    return depth


def extract_window(
    lines: list[str], cursor_line: int, cursor_column: int
) -> tuple[str, str]:
    """Cut the bounded text windows around the cursor.

    The before-window spans up to ``CONTEXT_LINES_BEFORE`` lines above the
    cursor plus the cursor line itself cut at the cursor column, and keeps the
    last ``MAX_CONTEXT_CHARS`` characters. The after-window spans up to
    ``CONTEXT_LINES_AFTER`` lines below the cursor line and keeps the first
    ``MAX_CONTEXT_CHARS`` characters.

    Args:
        lines: Document lines
        cursor_line: Zero-based cursor line
        cursor_column: Cursor column in UTF-16 code units

    Returns:
        ``(text_before_cursor, text_after_cursor)``
    """
    start = max(0, cursor_line - CONTEXT_LINES_BEFORE)
    lines_before = lines[start : max(0, cursor_line + 1)]
    after_start = max(0, cursor_line + 1)
    lines_after = lines[after_start : after_start + CONTEXT_LINES_AFTER]

    if lines_before and 0 <= cursor_line < len(lines):
        last = lines_before[-1]
        lines_before[-1] = last[: column_to_index(last, cursor_column)]

    text_before = "\n".join(lines_before)[-MAX_CONTEXT_CHARS:]
    text_after = "\n".join(lines_after)[:MAX_CONTEXT_CHARS]
    return text_before, text_after


def analyze_document(
    text: str,
    cursor_line: int,
    cursor_column: int,
    document_type: DocumentType | None = None,
) -> DocumentContext:
    """Analyze a document and extract the full context for a completion.

    Total over any input: out-of-range cursor lines read as blank and columns
    are clamped to the line.

    Args:
        text: Full document text
        cursor_line: Zero-based cursor line
        cursor_column: Cursor column in UTF-16 code units
        document_type: Resolved document type, or None

    Returns:
        The document context snapshot

    Example:
        >>> doc = "# Notes\\n\\n## Goals\\n- Ship v1"
        >>> ctx = analyze_document(doc, 3, 9)
        >>> ctx.current_section, ctx.cursor_position.value, ctx.current_depth
        ('Goals', 'content', 1)
    """
    lines = split_lines(text)
    structure = extract_structure(text)
    text_before, text_after = extract_window(lines, cursor_line, cursor_column)

    return DocumentContext(
        document_type=document_type,
        current_section=find_current_section(structure, cursor_line),
        cursor_position=detect_cursor_position(lines, cursor_line, structure),
        preceding_structure=tuple(_nodes_up_to(structure, cursor_line)),
        current_depth=calculate_depth(structure, cursor_line),
        text_before_cursor=text_before,
        text_after_cursor=text_after,
        current_line=line_at(lines, cursor_line),
    )
