"""Prompt builder: renders a DocumentContext into system and user prompts.

Pure and deterministic: the same context and mode always produce the same
prompt strings.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from thoughtcompletion.analysis.document_context import DocumentContext
from thoughtcompletion.analysis.position import CursorPosition
from thoughtcompletion.analysis.structure import NodeType, StructureNode
from thoughtcompletion.prompts.templates import (
    CONTENT_SYSTEM_PROMPT,
    STRUCTURE_SYSTEM_PROMPT,
)

# Number of trailing structure nodes summarized for the model
RECENT_STRUCTURE_LIMIT = 10

STRUCTURE_USER_TEMPLATE = """CONTEXT & FRAMEWORK:
{type_context}{section_context}

RECENT STRUCTURE:
{structure_summary}

CONTENT BEFORE CURSOR (DO NOT REPEAT):
{text_before_cursor}

INSTRUCTIONS:
1. Analyze the logic flow above.
2. Suggest the MAJOR structural elements (headers/bullets) that should come next.
3. Use the framework specified directly above (e.g., SWOT, Negotiations).
4. DO NOT write content. DO NOT repeat existing text.
5. If the argument is weak, suggest a header like "### Critical Gaps" or \
"### Evidence Required".

Generate ONLY the new structure."""

CONTENT_USER_TEMPLATE = """CONTEXT & FRAMEWORK:
{type_context}{section_context}

CONTENT BEFORE CURSOR (DO NOT REPEAT):
{text_before_cursor}

CURRENT LINE:
{current_line}

CONTENT AFTER CURSOR:
{text_after_cursor}

INSTRUCTIONS:
1. You are coaching the user to write this section.
2. Continue the current point naturally from the cursor.
3. Provide *leading sentences* that force specific logic (e.g., "The root cause \
of this is...").
4. Insert *probing questions* as comments (e.g., "<!-- Is this assumption valid? -->").
5. DO NOT simply autocomplete generic text.
6. DO NOT repeat existing text.

Generate ONLY the new text/scaffolding."""


@dataclass(frozen=True)
class BuiltPrompt:
    """System and user prompt for one completion request."""

    system_prompt: str
    user_prompt: str


def render_node(node: StructureNode) -> str:
    """Render a structure node back to a canonical markdown line."""
    if node.type == NodeType.HEADER:
        prefix = "#" * node.level + " "
    elif node.type == NodeType.BULLET:
        prefix = "  " * (node.level - 1) + "- "
    elif node.type == NodeType.NUMBERED:
        prefix = "  " * (node.level - 1) + "1. "
    else:
        prefix = ""
    return prefix + node.content


def summarize_structure(
    structure: Sequence[StructureNode], limit: int = RECENT_STRUCTURE_LIMIT
) -> str:
    """Render the last ``limit`` nodes, oldest first, one per line."""
    recent = structure[-limit:] if limit > 0 else ()
    return "\n".join(render_node(node) for node in recent)


def _type_context(context: DocumentContext) -> str:
    if context.document_type is None:
        return ""
    return (
        f"\nDocument type: {context.document_type.name}\n"
        f"{context.document_type.working_prompt}"
    )


def _section_context(context: DocumentContext) -> str:
    if not context.current_section:
        return ""
    return f"\nCurrent section: {context.current_section}"


def build_structure_prompt(context: DocumentContext) -> BuiltPrompt:
    """Build the prompt asking for new structural elements."""
    user_prompt = STRUCTURE_USER_TEMPLATE.format(
        type_context=_type_context(context),
        section_context=_section_context(context),
        structure_summary=summarize_structure(context.preceding_structure),
        text_before_cursor=context.text_before_cursor,
    )
    return BuiltPrompt(system_prompt=STRUCTURE_SYSTEM_PROMPT, user_prompt=user_prompt)


def build_content_prompt(context: DocumentContext) -> BuiltPrompt:
    """Build the prompt asking for new body text at the cursor."""
    user_prompt = CONTENT_USER_TEMPLATE.format(
        type_context=_type_context(context),
        section_context=_section_context(context),
        text_before_cursor=context.text_before_cursor,
        current_line=context.current_line,
        text_after_cursor=context.text_after_cursor,
    )
    return BuiltPrompt(system_prompt=CONTENT_SYSTEM_PROMPT, user_prompt=user_prompt)


def build_prompt_for_mode(
    context: DocumentContext, mode: CursorPosition
) -> BuiltPrompt:
    """Build the prompt for an explicit mode, ignoring the detected position.

    Args:
        context: Document context
        mode: Completion mode to use

    Returns:
        The built prompt
    """
    if CursorPosition(mode) == CursorPosition.STRUCTURE:
        return build_structure_prompt(context)
    return build_content_prompt(context)


def build_prompt(context: DocumentContext) -> BuiltPrompt:
    """Build the prompt for the mode detected at the cursor."""
    return build_prompt_for_mode(context, context.cursor_position)
