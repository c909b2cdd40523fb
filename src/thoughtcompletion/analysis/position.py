"""Cursor position classification.

``detect_cursor_position`` is the single authoritative classifier: it decides
whether a completion at the cursor should propose new structure (headers,
bullets) or continue the current content.

The line-signal layer (``analyze_position`` with ``should_continue_structure``
and ``should_fill_content``) is advisory only. Its two predicates are not
mutually exclusive and can disagree with the authoritative mode; callers use
them for diagnostics or finer-grained UI hints, never to pick the prompt.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from thoughtcompletion.analysis.structure import (
    BULLET_PATTERN,
    HEADER_PATTERN,
    NUMBERED_PATTERN,
    StructureNode,
    column_to_index,
    is_blank,
    line_at,
)


class CursorPosition(str, Enum):
    """Completion mode implied by the cursor position.

    Attributes:
        STRUCTURE: Propose new structural elements (headers, bullets).
        CONTENT: Elaborate the current point with body text.
    """

    STRUCTURE = "structure"
    CONTENT = "content"


# Line begins with a structural marker (no leading indentation)
STRUCTURAL_LINE_PATTERN = re.compile(r"^(#{1,6}\s|[-*+]\s|[0-9]+\.\s)")


def detect_cursor_position(
    lines: list[str],
    cursor_line: int,
    structure: Sequence[StructureNode] | None = None,
) -> CursorPosition:
    """Decide whether the cursor sits at a structure or a content point.

    First match wins:
    1. blank line
    2. header line
    3. bullet with no text after the marker
    4. numbered item with no text after the numeral
    all yield STRUCTURE; anything else is CONTENT.

    Args:
        lines: Document lines
        cursor_line: Zero-based cursor line; out of range reads as blank
        structure: Extracted structure. Accepted for callers that already
            have it; classification only inspects the cursor line.

    Returns:
        The cursor position
    """
    line = line_at(lines, cursor_line)

    if is_blank(line):
        return CursorPosition.STRUCTURE

    if HEADER_PATTERN.match(line):
        return CursorPosition.STRUCTURE

    bullet_match = BULLET_PATTERN.match(line)
    if bullet_match and not bullet_match.group(2).strip():
        return CursorPosition.STRUCTURE

    numbered_match = NUMBERED_PATTERN.match(line)
    if numbered_match and not numbered_match.group(3).strip():
        return CursorPosition.STRUCTURE

    return CursorPosition.CONTENT


@dataclass(frozen=True)
class PositionSignals:
    """Line-level signals around the cursor.

    Attributes:
        at_end_of_line: Cursor is at or past the last non-whitespace character.
        is_structural_line: Line starts with a header or list marker.
        is_empty_line: Line is empty or whitespace-only.
        empty_lines_before: Consecutive blank lines directly above the cursor.
        after_colon: Text before the cursor ends with ``:``.
    """

    at_end_of_line: bool
    is_structural_line: bool
    is_empty_line: bool
    empty_lines_before: int
    after_colon: bool


def analyze_position(
    lines: list[str], line_number: int, column: int
) -> PositionSignals:
    """Compute line-level signals for a cursor position.

    Args:
        lines: Document lines
        line_number: Zero-based cursor line
        column: Cursor column in UTF-16 code units

    Returns:
        The signal set
    """
    line = line_at(lines, line_number)
    index = column_to_index(line, column)
    text_before_cursor = line[:index]

    empty_lines_before = 0
    for i in range(min(line_number, len(lines)) - 1, -1, -1):
        if not is_blank(lines[i]):
            break
        empty_lines_before += 1

    return PositionSignals(
        at_end_of_line=index >= len(line.rstrip()),
        is_structural_line=bool(STRUCTURAL_LINE_PATTERN.match(line)),
        is_empty_line=is_blank(line),
        empty_lines_before=empty_lines_before,
        after_colon=text_before_cursor.rstrip().endswith(":"),
    )


def should_continue_structure(signals: PositionSignals) -> bool:
    """Advisory: whether the position suggests continuing the structure."""
    # A colon usually introduces a list
    if signals.after_colon:
        return True

    if signals.is_empty_line and signals.empty_lines_before == 0:
        return True

    return signals.is_structural_line and signals.at_end_of_line


def should_fill_content(signals: PositionSignals) -> bool:
    """Advisory: whether the position suggests filling in content."""
    if not signals.is_structural_line and not signals.is_empty_line:
        return True

    return signals.is_structural_line and not signals.at_end_of_line


@dataclass(frozen=True)
class PositionClassification:
    """Authoritative mode plus the advisory signals it was computed alongside.

    Attributes:
        mode: Result of ``detect_cursor_position``; the only value that
            selects prompts.
        signals: Diagnostic line signals.
    """

    mode: CursorPosition
    signals: PositionSignals

    @property
    def continue_structure_hint(self) -> bool:
        """Advisory structure hint from the signals."""
        return should_continue_structure(self.signals)

    @property
    def fill_content_hint(self) -> bool:
        """Advisory content hint from the signals."""
        return should_fill_content(self.signals)

    @property
    def hints_agree(self) -> bool:
        """Whether the advisory hint for ``mode`` holds."""
        if self.mode == CursorPosition.STRUCTURE:
            return self.continue_structure_hint
        return self.fill_content_hint


def classify_position(
    lines: list[str],
    cursor_line: int,
    cursor_column: int,
    structure: Sequence[StructureNode] | None = None,
) -> PositionClassification:
    """Classify the cursor and collect advisory signals in one call.

    Args:
        lines: Document lines
        cursor_line: Zero-based cursor line
        cursor_column: Cursor column in UTF-16 code units
        structure: Optional extracted structure

    Returns:
        The authoritative mode with its diagnostic signals
    """
    return PositionClassification(
        mode=detect_cursor_position(lines, cursor_line, structure),
        signals=analyze_position(lines, cursor_line, cursor_column),
    )
