"""Document type resolution.

Resolves the active document type either by explicit name or, for ``auto``,
by asking the completion provider to classify the document. Resolution never
raises: any provider failure degrades to None, meaning "general, no
type-specific guidance".
"""

from collections.abc import Iterable

from thoughtcompletion.lib.logging_config import get_logger
from thoughtcompletion.llm.types import CompletionOptions, CompletionProvider
from thoughtcompletion.models.document_type import DocumentType
from thoughtcompletion.prompts.templates import (
    find_document_type,
    get_all_document_types,
)

logger = get_logger(__name__)

AUTO_DETECT = "auto"
GENERAL_TYPE_NAME = "general"

# Detection request bounds
DETECTION_EXCERPT_CHARS = 2000
DETECTION_MAX_TOKENS = 50
DETECTION_TEMPERATURE = 0.1

DETECTION_PROMPT_TEMPLATE = """Analyze the following document and determine which \
type it most closely matches.

Available document types:
{type_descriptions}
{general_index}. general: Does not match any specific type above

Document excerpt:
---
{excerpt}
---

Respond with ONLY the type name (e.g., "negotiation" or "general"). No explanation."""


def build_detection_prompt(document_text: str, types: list[DocumentType]) -> str:
    """Build the classification prompt for a document.

    Args:
        document_text: Full document text; only the first
            ``DETECTION_EXCERPT_CHARS`` characters are shown to the model
        types: Candidate types in presentation order

    Returns:
        Prompt text
    """
    type_descriptions = "\n".join(
        f"{i}. {t.name}: {t.detection_prompt}" for i, t in enumerate(types, start=1)
    )
    return DETECTION_PROMPT_TEMPLATE.format(
        type_descriptions=type_descriptions,
        general_index=len(types) + 1,
        excerpt=document_text[:DETECTION_EXCERPT_CHARS],
    )


def normalize_type_response(response: str) -> str:
    """Normalize a model reply to a bare lowercase type name."""
    return response.strip().lower().replace('"', "").replace("'", "")


def match_document_type(
    response: str, types: Iterable[DocumentType]
) -> DocumentType | None:
    """Match a model reply against candidate types.

    Args:
        response: Raw model reply
        types: Candidate types

    Returns:
        The matched type (case-insensitive), or None for ``general`` or an
        unknown name
    """
    type_name = normalize_type_response(response)
    if type_name == GENERAL_TYPE_NAME:
        return None

    for doc_type in types:
        if doc_type.name.lower() == type_name:
            return doc_type
    return None


async def detect_document_type(
    document_text: str,
    custom_types: Iterable[DocumentType],
    llm: CompletionProvider,
) -> DocumentType | None:
    """Detect the document type by asking the completion provider.

    Makes at most one provider call and never retries.

    Args:
        document_text: Full document text
        custom_types: User-defined types merged over the built-ins
        llm: Completion provider

    Returns:
        Detected type, or None for general or on any failure
    """
    all_types = get_all_document_types(custom_types)
    if not all_types:
        return None

    prompt = build_detection_prompt(document_text, all_types)

    try:
        response = await llm.complete(
            prompt,
            CompletionOptions(
                max_tokens=DETECTION_MAX_TOKENS,
                temperature=DETECTION_TEMPERATURE,
            ),
        )
    except Exception as e:
        logger.warning(f"Document type detection failed: {e}", exc_info=True)
        return None

    matched = match_document_type(response or "", all_types)
    if matched is None:
        logger.debug(f"Detection reply {response!r} resolved to general")
    else:
        logger.debug(f"Detected document type: {matched.name}")
    return matched


async def resolve_document_type(
    document_text: str,
    active_type_name: str,
    custom_types: Iterable[DocumentType],
    llm: CompletionProvider,
) -> DocumentType | None:
    """Resolve the document type from an explicit choice or by detection.

    Args:
        document_text: Full document text
        active_type_name: ``"auto"`` or the exact name of a type
        custom_types: User-defined types
        llm: Completion provider, used only for ``"auto"``

    Returns:
        The resolved type, or None when no type applies
    """
    custom_types = list(custom_types)
    if active_type_name == AUTO_DETECT:
        return await detect_document_type(document_text, custom_types, llm)

    doc_type = find_document_type(active_type_name, custom_types)
    if doc_type is None and active_type_name != GENERAL_TYPE_NAME:
        logger.warning(f"Unknown document type '{active_type_name}', using general")
    return doc_type
