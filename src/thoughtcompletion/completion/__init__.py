"""Completion service with trigger rules and document type caching."""

from thoughtcompletion.completion.cache import (
    CacheKey,
    DocumentTypeCache,
    custom_types_key,
)
from thoughtcompletion.completion.service import (
    CompletionRequest,
    CompletionService,
    TriggerKind,
    is_mid_word,
)
from thoughtcompletion.models.config import TriggerMode

__all__ = [
    "CacheKey",
    "CompletionRequest",
    "CompletionService",
    "DocumentTypeCache",
    "TriggerKind",
    "TriggerMode",
    "custom_types_key",
    "is_mid_word",
]
