"""Ollama completion provider.

Generation goes through Ollama's OpenAI-compatible ``/v1/chat/completions``
endpoint; availability and model listing use the native ``/api/tags``
endpoint, which lives outside the ``/v1`` prefix.
"""

from typing import Any

import httpx

from thoughtcompletion.lib.logging_config import get_logger
from thoughtcompletion.llm.base import OpenAICompatibleProvider
from thoughtcompletion.models.config import OllamaConfig

logger = get_logger(__name__)


class OllamaProvider(OpenAICompatibleProvider):
    """Provider for a local Ollama server."""

    name = "Ollama"

    def __init__(
        self,
        config: OllamaConfig,
        timeout: float = OpenAICompatibleProvider.DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the provider from its settings section.

        Args:
            config: Ollama connection settings
            timeout: Request timeout in seconds
            client: Optional shared HTTP client
        """
        super().__init__(config.base_url, config.model, timeout=timeout, client=client)

    @property
    def native_base_url(self) -> str:
        """Base URL of the native API (``base_url`` without a trailing ``/v1``)."""
        return self.base_url.removesuffix("/v1")

    def _extract_content(self, data: dict[str, Any]) -> str:
        content = super()._extract_content(data)
        if not content:
            choices = data.get("choices") or [{}]
            message = (choices[0] or {}).get("message") or {}
            if message.get("reasoning"):
                logger.warning(
                    f"[{self.name}] Model {self.model} returned reasoning but no "
                    f"content. Thinking models may need a larger max_tokens."
                )
        return content

    async def is_available(self) -> bool:
        """Check that ``GET /api/tags`` succeeds."""
        data = await self._get_json(f"{self.native_base_url}/api/tags")
        return data is not None

    async def list_models(self) -> list[str]:
        """List installed model names from ``GET /api/tags``.

        Returns:
            Model names, or an empty list on any failure
        """
        data = await self._get_json(f"{self.native_base_url}/api/tags")
        if not isinstance(data, dict):
            return []
        return [
            item["name"]
            for item in data.get("models") or []
            if isinstance(item, dict) and isinstance(item.get("name"), str)
        ]
