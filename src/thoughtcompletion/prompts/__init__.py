"""Prompt construction and document type resolution."""

from thoughtcompletion.prompts.builder import (
    RECENT_STRUCTURE_LIMIT,
    BuiltPrompt,
    build_prompt,
    build_prompt_for_mode,
)
from thoughtcompletion.prompts.templates import (
    CONTENT_SYSTEM_PROMPT,
    DEFAULT_DOCUMENT_TYPES,
    STRUCTURE_SYSTEM_PROMPT,
    find_document_type,
    get_all_document_types,
)
from thoughtcompletion.prompts.type_detector import (
    AUTO_DETECT,
    DETECTION_EXCERPT_CHARS,
    detect_document_type,
    resolve_document_type,
)

__all__ = [
    "AUTO_DETECT",
    "CONTENT_SYSTEM_PROMPT",
    "DEFAULT_DOCUMENT_TYPES",
    "DETECTION_EXCERPT_CHARS",
    "RECENT_STRUCTURE_LIMIT",
    "STRUCTURE_SYSTEM_PROMPT",
    "BuiltPrompt",
    "build_prompt",
    "build_prompt_for_mode",
    "detect_document_type",
    "find_document_type",
    "get_all_document_types",
    "resolve_document_type",
]
