"""Pydantic models for settings and document types."""

from thoughtcompletion.models.config import (
    OllamaConfig,
    OpenAIConfig,
    ProviderConfig,
    ProviderEnum,
    Settings,
    TriggerMode,
)
from thoughtcompletion.models.document_type import DocumentType

__all__ = [
    "DocumentType",
    "OllamaConfig",
    "OpenAIConfig",
    "ProviderConfig",
    "ProviderEnum",
    "Settings",
    "TriggerMode",
]
