"""Document analysis: structure extraction, cursor classification and context."""

from thoughtcompletion.analysis.document_context import (
    CONTEXT_LINES_AFTER,
    CONTEXT_LINES_BEFORE,
    MAX_CONTEXT_CHARS,
    DocumentContext,
    analyze_document,
    calculate_depth,
    find_current_section,
)
from thoughtcompletion.analysis.position import (
    CursorPosition,
    PositionClassification,
    PositionSignals,
    analyze_position,
    classify_position,
    detect_cursor_position,
    should_continue_structure,
    should_fill_content,
)
from thoughtcompletion.analysis.structure import (
    NodeType,
    StructureNode,
    extract_structure,
    split_lines,
)

__all__ = [
    "CONTEXT_LINES_AFTER",
    "CONTEXT_LINES_BEFORE",
    "MAX_CONTEXT_CHARS",
    "CursorPosition",
    "DocumentContext",
    "NodeType",
    "PositionClassification",
    "PositionSignals",
    "StructureNode",
    "analyze_document",
    "analyze_position",
    "calculate_depth",
    "classify_position",
    "detect_cursor_position",
    "extract_structure",
    "find_current_section",
    "should_continue_structure",
    "should_fill_content",
    "split_lines",
]
