"""Tests for document context assembly."""

import pytest

from thoughtcompletion.analysis.document_context import (
    CONTEXT_LINES_BEFORE,
    MAX_CONTEXT_CHARS,
    analyze_document,
    calculate_depth,
    find_current_section,
)
from thoughtcompletion.analysis.position import CursorPosition
from thoughtcompletion.analysis.structure import extract_structure
from thoughtcompletion.models.document_type import DocumentType

MY_DOCUMENT = """# My Document

## Background
Some background info

## Goals
- Goal 1
- Goal 2
"""


@pytest.mark.unit
class TestAnalyzeDocument:
    """Tests for the end-to-end context snapshot."""

    def test_cursor_at_end_of_bullet(self) -> None:
        """Test the context for a cursor at the end of '- Goal 2'."""
        context = analyze_document(MY_DOCUMENT, 7, 8)

        assert context.current_section == "Goals"
        assert len(context.preceding_structure) > 0
        assert context.current_line == "- Goal 2"
        assert context.cursor_position == CursorPosition.CONTENT
        assert context.current_depth == 1
        assert context.text_before_cursor.endswith("- Goal 1\n- Goal 2")
        assert context.text_after_cursor == ""
        assert context.document_type is None

    def test_preceding_structure_stops_at_cursor(self) -> None:
        """Test that nodes after the cursor line are excluded."""
        context = analyze_document(MY_DOCUMENT, 3, 0)

        assert [n.content for n in context.preceding_structure] == [
            "My Document",
            "Background",
            "Some background info",
        ]
        assert context.current_section == "Background"

    def test_cursor_line_cut_at_column(self) -> None:
        """Test that the cursor line is cut at the cursor column."""
        context = analyze_document("Hello world\nnext", 0, 5)

        assert context.text_before_cursor == "Hello"
        assert context.text_after_cursor == "next"
        assert context.current_line == "Hello world"

    def test_document_type_passes_through(self) -> None:
        """Test that the resolved document type is carried unchanged."""
        doc_type = DocumentType(
            name="retro", detection_prompt="Retrospective", working_prompt="Reflect."
        )

        context = analyze_document(MY_DOCUMENT, 0, 0, doc_type)

        assert context.document_type is doc_type

    def test_blank_cursor_line_is_structure(self) -> None:
        """Test that a blank cursor line selects structure mode."""
        context = analyze_document(MY_DOCUMENT, 4, 0)

        assert context.cursor_position == CursorPosition.STRUCTURE

    def test_cursor_beyond_document(self) -> None:
        """Test a cursor line past the end of the document."""
        context = analyze_document("alpha\nbeta", 10, 3)

        assert context.current_line == ""
        assert context.cursor_position == CursorPosition.STRUCTURE
        assert context.text_before_cursor == "alpha\nbeta"
        assert context.text_after_cursor == ""

    def test_equal_inputs_give_equal_contexts(self) -> None:
        """Test that analysis is deterministic."""
        assert analyze_document(MY_DOCUMENT, 7, 8) == analyze_document(
            MY_DOCUMENT, 7, 8
        )


@pytest.mark.unit
class TestWindowing:
    """Tests for the bounded text windows."""

    def test_only_last_lines_before_cursor(self) -> None:
        """Test that at most 20 lines above the cursor are kept."""
        lines = [f"row {i:02d}" for i in range(30)] + ["cursor line"]
        context = analyze_document("\n".join(lines), 30, 11)

        before = context.text_before_cursor.split("\n")
        assert before[0] == "row 10"
        assert before[-1] == "cursor line"
        assert len(before) == CONTEXT_LINES_BEFORE + 1
        assert "row 09" not in context.text_before_cursor

    def test_before_window_character_cap(self) -> None:
        """Test that the before-window keeps only its last 1000 characters."""
        lines = [f"{i:02d}" + "x" * 98 for i in range(30)] + ["tail"]
        context = analyze_document("\n".join(lines), 30, 4)

        assert len(context.text_before_cursor) == MAX_CONTEXT_CHARS
        assert context.text_before_cursor.endswith("\ntail")
        assert "10" + "x" * 98 not in context.text_before_cursor

    def test_after_window_line_limit(self) -> None:
        """Test that at most 20 lines below the cursor are kept."""
        lines = ["cursor"] + [f"after {i:02d}" for i in range(1, 31)]
        context = analyze_document("\n".join(lines), 0, 6)

        after = context.text_after_cursor.split("\n")
        assert after[0] == "after 01"
        assert after[-1] == "after 20"
        assert "after 21" not in context.text_after_cursor

    def test_after_window_character_cap(self) -> None:
        """Test that the after-window keeps only its first 1000 characters."""
        lines = ["cursor"] + ["y" * 99 for _ in range(20)]
        context = analyze_document("\n".join(lines), 0, 6)

        assert len(context.text_after_cursor) == MAX_CONTEXT_CHARS
        assert context.text_after_cursor.startswith("y" * 99 + "\n")


@pytest.mark.unit
class TestSectionAndDepth:
    """Tests for section tracking and nesting depth."""

    def test_no_header_before_cursor(self) -> None:
        """Test that no preceding header yields None."""
        structure = extract_structure("prose\n# Later header")

        assert find_current_section(structure, 0) is None

    def test_header_on_cursor_line_counts(self) -> None:
        """Test that a header on the cursor line is the current section."""
        structure = extract_structure("# One\ntext\n## Two")

        assert find_current_section(structure, 2) == "Two"

    def test_later_header_never_selected(self) -> None:
        """Test that headers after the cursor are ignored."""
        structure = extract_structure("# One\ntext\n## Two")

        assert find_current_section(structure, 1) == "One"

    def test_depth_from_header(self) -> None:
        """Test that paragraphs keep the depth of the preceding header."""
        structure = extract_structure("## Section\nprose")

        assert calculate_depth(structure, 1) == 2

    def test_depth_from_nested_bullet(self) -> None:
        """Test that the latest list item sets the depth."""
        structure = extract_structure("# Top\n- a\n  - b\n    - c")

        assert calculate_depth(structure, 2) == 2
        assert calculate_depth(structure, 3) == 3

    def test_depth_defaults_to_zero(self) -> None:
        """Test depth with only paragraphs before the cursor."""
        structure = extract_structure("just prose\nmore prose")

        assert calculate_depth(structure, 1) == 0
