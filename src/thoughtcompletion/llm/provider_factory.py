"""Factory for creating completion providers from settings."""

import httpx

from thoughtcompletion.lib.errors import UnknownProviderError
from thoughtcompletion.lib.logging_config import get_logger
from thoughtcompletion.llm.base import OpenAICompatibleProvider
from thoughtcompletion.llm.ollama_provider import OllamaProvider
from thoughtcompletion.llm.openai_provider import OpenAIProvider
from thoughtcompletion.llm.types import CompletionProvider
from thoughtcompletion.models.config import (
    OllamaConfig,
    OpenAIConfig,
    ProviderConfig,
    Settings,
)

logger = get_logger(__name__)


def create_provider(
    config: ProviderConfig,
    timeout: float = OpenAICompatibleProvider.DEFAULT_TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> CompletionProvider:
    """Create a provider for a provider settings section.

    Args:
        config: OpenAI or Ollama connection settings
        timeout: Request timeout in seconds
        client: Optional shared HTTP client

    Returns:
        Provider instance

    Raises:
        UnknownProviderError: If ``config.type`` is not supported
    """
    provider_type = getattr(config, "type", None)
    if provider_type == "openai" and isinstance(config, OpenAIConfig):
        provider: CompletionProvider = OpenAIProvider(
            config, timeout=timeout, client=client
        )
    elif provider_type == "ollama" and isinstance(config, OllamaConfig):
        provider = OllamaProvider(config, timeout=timeout, client=client)
    else:
        raise UnknownProviderError(str(provider_type))

    logger.debug(f"Created {provider.name} provider for model {config.model}")
    return provider


def create_provider_from_settings(
    settings: Settings, client: httpx.AsyncClient | None = None
) -> CompletionProvider:
    """Create the provider selected by ``settings.provider``."""
    return create_provider(
        settings.active_provider_config(),
        timeout=settings.request_timeout,
        client=client,
    )
