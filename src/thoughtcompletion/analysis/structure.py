"""Line-level structure extraction for markdown and plaintext documents.

Every physical line is classified on its own, with no lookahead or merging,
into one of four node types. The resulting outline drives cursor
classification, section tracking and the "recent structure" summary shown to
the model.
"""

import re
from dataclasses import dataclass
from enum import Enum


class NodeType(str, Enum):
    """Kind of structural node.

    Attributes:
        HEADER: Markdown ATX heading (``#`` to ``######``)
        BULLET: Unordered list item (``-``, ``*`` or ``+``)
        NUMBERED: Ordered list item (``1.``)
        PARAGRAPH: Any other non-blank line
    """

    HEADER = "header"
    BULLET = "bullet"
    NUMBERED = "numbered"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class StructureNode:
    """One structural unit of a document.

    Attributes:
        type: The node kind.
        level: Heading depth (1-6) for headers, ``indent // 2 + 1`` for list
            items, 0 for paragraphs.
        content: Line text with its marker removed and whitespace trimmed.
        line: Zero-based source line index.
    """

    type: NodeType
    level: int
    content: str
    line: int

    @property
    def is_list_item(self) -> bool:
        """Whether this node is a bullet or numbered item."""
        return self.type in (NodeType.BULLET, NodeType.NUMBERED)


HEADER_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
BULLET_PATTERN = re.compile(r"^(\s*)[-*+]\s+(.*)$")
NUMBERED_PATTERN = re.compile(r"^(\s*)([0-9]+)\.\s+(.*)$")


def split_lines(text: str) -> list[str]:
    """Split document text into lines.

    Only ``\\n`` separates lines so indices match editor line numbers; a
    trailing ``\\r`` left by CRLF input is dropped from each line.
    """
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def line_at(lines: list[str], index: int) -> str:
    """Return the line at ``index``, or an empty string when out of range."""
    if 0 <= index < len(lines):
        return lines[index]
    return ""


def column_to_index(line: str, column: int) -> int:
    """Convert an editor column to a string index.

    Editors report columns in UTF-16 code units, where characters outside the
    Basic Multilingual Plane (most emoji) count twice. The result is clamped
    to ``[0, len(line)]``; a column inside a surrogate pair rounds up to the
    end of that character.

    Args:
        line: Line text
        column: Column in UTF-16 code units

    Returns:
        Index into ``line``
    """
    if column <= 0:
        return 0
    units = 0
    for index, char in enumerate(line):
        if units >= column:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(line)


def is_blank(line: str) -> bool:
    """Whether a line is empty or whitespace-only."""
    return not line.strip()


def list_level(indent: str) -> int:
    """Nesting level for a list item with the given leading whitespace."""
    return len(indent) // 2 + 1


def parse_line(line: str, line_number: int) -> StructureNode | None:
    """Classify a single line.

    Patterns are tried in priority order: header, bullet, numbered, paragraph.

    Args:
        line: Raw line text
        line_number: Zero-based index of the line

    Returns:
        The node for the line, or None for a blank line
    """
    header_match = HEADER_PATTERN.match(line)
    if header_match:
        return StructureNode(
            type=NodeType.HEADER,
            level=len(header_match.group(1)),
            content=header_match.group(2).strip(),
            line=line_number,
        )

    bullet_match = BULLET_PATTERN.match(line)
    if bullet_match:
        return StructureNode(
            type=NodeType.BULLET,
            level=list_level(bullet_match.group(1)),
            content=bullet_match.group(2).strip(),
            line=line_number,
        )

    numbered_match = NUMBERED_PATTERN.match(line)
    if numbered_match:
        return StructureNode(
            type=NodeType.NUMBERED,
            level=list_level(numbered_match.group(1)),
            content=numbered_match.group(3).strip(),
            line=line_number,
        )

    if is_blank(line):
        return None

    return StructureNode(
        type=NodeType.PARAGRAPH, level=0, content=line.strip(), line=line_number
    )


def extract_structure(text: str) -> list[StructureNode]:
    """Extract structure nodes from document text.

    Args:
        text: Full document text

    Returns:
        Nodes in increasing line order, one per non-blank line

    Example:
        >>> nodes = extract_structure("# Plan\\n\\n- first\\n  - nested")
        >>> [(n.type.value, n.level, n.content) for n in nodes]
        [('header', 1, 'Plan'), ('bullet', 1, 'first'), ('bullet', 2, 'nested')]
    """
    nodes: list[StructureNode] = []
    for index, line in enumerate(split_lines(text)):
        node = parse_line(line, index)
        if node is not None:
            nodes.append(node)
    return nodes
