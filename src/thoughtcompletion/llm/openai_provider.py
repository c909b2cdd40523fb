"""OpenAI-compatible completion provider.

Works with the OpenAI API and any server implementing the same
``/chat/completions`` and ``/models`` endpoints (LM Studio, LocalAI, ...).
"""

import httpx

from thoughtcompletion.lib.logging_config import get_logger
from thoughtcompletion.llm.base import OpenAICompatibleProvider
from thoughtcompletion.models.config import OpenAIConfig

logger = get_logger(__name__)


class OpenAIProvider(OpenAICompatibleProvider):
    """Provider for OpenAI and OpenAI-compatible APIs.

    Example:
        >>> provider = OpenAIProvider(OpenAIConfig(api_key="sk-..."))
        >>> text = await provider.complete("Continue this list:")
    """

    name = "OpenAI Compatible"

    def __init__(
        self,
        config: OpenAIConfig,
        timeout: float = OpenAICompatibleProvider.DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the provider from its settings section.

        Args:
            config: OpenAI connection settings
            timeout: Request timeout in seconds
            client: Optional shared HTTP client
        """
        super().__init__(config.base_url, config.model, timeout=timeout, client=client)
        self.api_key = config.api_key

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def is_available(self) -> bool:
        """Check that ``GET /models`` succeeds."""
        data = await self._get_json(f"{self.base_url}/models")
        return data is not None

    async def list_models(self) -> list[str]:
        """List model ids from ``GET /models``.

        Returns:
            Model identifiers, or an empty list on any failure
        """
        data = await self._get_json(f"{self.base_url}/models")
        if not isinstance(data, dict):
            return []
        return [
            item["id"]
            for item in data.get("data") or []
            if isinstance(item, dict) and isinstance(item.get("id"), str)
        ]
