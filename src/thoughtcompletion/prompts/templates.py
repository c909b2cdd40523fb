"""Prompt templates and built-in document types.

Holds the two static system prompts (one per completion mode) and the default
document type table, plus the override-by-name merge of custom types.
"""

from collections.abc import Iterable

from thoughtcompletion.models.document_type import DocumentType

STRUCTURE_SYSTEM_PROMPT = """You are a Strategic Document Architect acting as a \
thought partner.

Your role is NOT to write the content, but to design the *structure* that guides \
the user's thinking.
You suggest logical frameworks, gap analysis, and structural elements that force \
the user to cover critical angles.

CRITICAL: Output ONLY the NEW structural elements (headers, bullets). Do NOT repeat \
existing content.

Guidelines:
- Suggest specific, probing headers (e.g., "### Potential Risks (Operational vs \
Financial)" instead of just "Risks")
- Use standard frameworks relevant to the document type (e.g., SWOT, First \
Principles, SCAMPER)
- Highlight missing logic or gaps in the argument
- Keep suggestions concise but directive
- Force the user to think, don't do the thinking for them

Return ONLY the new structure."""

CONTENT_SYSTEM_PROMPT = """You are a Socratic Editor and Thought Coach.

Your role is NOT to write the content for the user, but to help them clarify and \
expand their own thoughts.
You provide "scaffolding": probing questions, leading sentences, and placeholders \
that guide the user to a deeper analysis.

CRITICAL: Output ONLY new text to append. Do NOT repeat existing content.

Guidelines:
- Use "Socratic questioning" in comments or brackets (e.g., \
"<!-- What is the root cause? -->")
- Provide *leading* sentences that force specific detail (e.g., "The primary \
constraint here is...")
- Avoid flowery language; focus on logic, evidence, and precision
- If the cursor is in a blank section, provide a template or key questions to answer
- Enforce best practices for the specific document type

Return ONLY the new text/scaffolding."""

DEFAULT_DOCUMENT_TYPES: tuple[DocumentType, ...] = (
    DocumentType(
        name="negotiation",
        detection_prompt=(
            "Document discusses parties, positions, interests, BATNA, alternatives, "
            "deal terms, concessions, or negotiation strategy"
        ),
        working_prompt=(
            'Enforce the "Harvard Negotiation Project" framework. Focus on: '
            "Interests vs Positions, Options for Mutual Gain, Objective Criteria, "
            'and BATNA/WATNA. Ask: "What is their underlying interest?" '
            '"What is your walk-away point?"'
        ),
    ),
    DocumentType(
        name="brainstorm",
        detection_prompt=(
            "Document contains idea generation, creative exploration, free-form "
            'thoughts, possibilities, or "what if" scenarios'
        ),
        working_prompt=(
            'Use "SCAMPER" (Substitute, Combine, Adapt, Modify, Put to another use, '
            'Eliminate, Reverse) or "First Principles" thinking. Encourage diverse '
            'angles. Ask: "What if we inverted the assumption?" '
            '"What is the fundamental truth here?"'
        ),
    ),
    DocumentType(
        name="project-evaluation",
        detection_prompt=(
            "Document evaluates a project with criteria, metrics, risks, "
            "recommendations, pros/cons, or assessment of outcomes"
        ),
        working_prompt=(
            "Use rigorous evaluation frameworks. For strategy: SWOT or PEEST. "
            'For execution: "Keep/Stop/Start" or ROI/Risk matrix. Ask for specific '
            'evidence and quantitative metrics. "What is the data source?" '
            '"What are the second-order effects?"'
        ),
    ),
    DocumentType(
        name="meeting-notes",
        detection_prompt=(
            "Document contains agenda items, attendees, discussion points, "
            "decisions made, or action items"
        ),
        working_prompt=(
            "Focus on Action and Accountability. Ensure every decision has an owner "
            'and deadline. Distinguish between "Discussion", "Decision", and '
            '"Action". Ask: "Who owns this?" "by When?" '
            '"What is the definition of done?"'
        ),
    ),
    DocumentType(
        name="research-notes",
        detection_prompt=(
            "Document contains research findings, sources, quotes, hypotheses, "
            "or analysis of information"
        ),
        working_prompt=(
            'Enforce "Pyramid Principle" or scientific method. Hypothesis -> '
            'Evidence -> Conclusion. Require source citation. Ask: "What disproves '
            'this hypothesis?" "Is this correlation or causation?"'
        ),
    ),
    DocumentType(
        name="decision-document",
        detection_prompt=(
            "Document analyzes a decision with options, criteria, trade-offs, "
            "or recommendations"
        ),
        working_prompt=(
            'Enforce "Decision Quality" (DQ) framework. 1. Helpful Frame '
            "2. Creative Alternatives 3. Meaningful Information 4. Clear Values "
            '5. Sound Reasoning 6. Commitment to Action. Ask: "What options did '
            'we satisfy?"'
        ),
    ),
)


def get_all_document_types(
    custom_types: Iterable[DocumentType] = (),
) -> list[DocumentType]:
    """Merge built-in and custom document types.

    Built-ins are inserted first; each custom type then overlays by name and
    moves to the end, so the result lists the built-ins that were not
    overridden followed by the custom types. A name never appears twice.

    Args:
        custom_types: User-defined types

    Returns:
        Merged list of types
    """
    merged: dict[str, DocumentType] = {t.name: t for t in DEFAULT_DOCUMENT_TYPES}
    for doc_type in custom_types:
        merged.pop(doc_type.name, None)
        merged[doc_type.name] = doc_type
    return list(merged.values())


def find_document_type(
    name: str, custom_types: Iterable[DocumentType] = ()
) -> DocumentType | None:
    """Find a document type by exact name among the merged types."""
    for doc_type in get_all_document_types(custom_types):
        if doc_type.name == name:
            return doc_type
    return None
