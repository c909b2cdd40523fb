"""Completion providers for OpenAI-compatible and Ollama endpoints."""

from thoughtcompletion.llm.ollama_provider import OllamaProvider
from thoughtcompletion.llm.openai_provider import OpenAIProvider
from thoughtcompletion.llm.provider_factory import (
    create_provider,
    create_provider_from_settings,
)
from thoughtcompletion.llm.types import (
    ChatMessage,
    CompletionOptions,
    CompletionProvider,
    ModelLister,
    supports_model_listing,
)

__all__ = [
    "ChatMessage",
    "CompletionOptions",
    "CompletionProvider",
    "ModelLister",
    "OllamaProvider",
    "OpenAIProvider",
    "create_provider",
    "create_provider_from_settings",
    "supports_model_listing",
]
