"""Shared HTTP plumbing for OpenAI-compatible chat completion endpoints.

Both supported providers speak the ``/chat/completions`` dialect; they differ
in authentication, availability checks and model listing, which subclasses
supply.
"""

import contextlib
from collections.abc import AsyncIterator
from typing import Any

import httpx

from thoughtcompletion.config.defaults import (
    DEFAULT_REQUEST_MAX_TOKENS,
    DEFAULT_REQUEST_TEMPERATURE,
)
from thoughtcompletion.lib.errors import ProviderAPIError, ProviderConnectionError
from thoughtcompletion.lib.logging_config import get_logger
from thoughtcompletion.llm.types import ChatMessage, CompletionOptions

logger = get_logger(__name__)


class OpenAICompatibleProvider:
    """Base class for providers exposing ``POST {base_url}/chat/completions``.

    Requests go straight to the endpoint; proxy environment variables are
    ignored (``trust_env=False``), matching how local model servers are
    usually reached.

    Attributes:
        name: Display name of the provider.
        base_url: Endpoint base URL without trailing slash.
        model: Model identifier sent with each request.
        timeout: Request timeout in seconds.
    """

    name = "OpenAI Compatible"
    DEFAULT_TIMEOUT = 60.0

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            base_url: Endpoint base URL; a trailing slash is removed
            model: Model identifier
            timeout: Request timeout in seconds
            client: Optional shared client; the provider does not close it
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._client = client

    def _headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        return {"Content-Type": "application/json"}

    @contextlib.asynccontextmanager
    async def _client_context(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the injected client, or a short-lived one."""
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout, trust_env=False) as client:
            yield client

    async def _request(
        self,
        method: str,
        url: str,
        json_body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Execute HTTP request with error handling.

        Args:
            method: HTTP method
            url: Request URL
            json_body: Optional JSON payload

        Returns:
            Successful response

        Raises:
            ProviderConnectionError: Connection/timeout issues
            ProviderAPIError: Non-2xx status code
        """
        try:
            async with self._client_context() as client:
                response = await client.request(
                    method,
                    url,
                    json=json_body,
                    headers=self._headers(),
                    timeout=self.timeout,
                )
        except httpx.TransportError as e:
            raise ProviderConnectionError(self.base_url, original_error=e) from e

        if not response.is_success:
            raise ProviderAPIError(url, response.status_code, response.text or None)

        return response

    def _build_payload(
        self, messages: list[ChatMessage], options: CompletionOptions | None
    ) -> dict[str, Any]:
        opts = options or CompletionOptions()
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "max_tokens": (
                opts.max_tokens
                if opts.max_tokens is not None
                else DEFAULT_REQUEST_MAX_TOKENS
            ),
            "temperature": (
                opts.temperature
                if opts.temperature is not None
                else DEFAULT_REQUEST_TEMPERATURE
            ),
        }
        if opts.stop_sequences:
            payload["stop"] = list(opts.stop_sequences)
        return payload

    def _extract_content(self, data: dict[str, Any]) -> str:
        """Pull the generated text out of a chat completion body.

        Raises:
            ValueError: If ``choices``, a choice or its message has the wrong
                shape
        """
        choices = data.get("choices") or []
        if not isinstance(choices, list):
            raise ValueError("'choices' is not a list")
        if not choices:
            return ""

        first = choices[0] or {}
        if not isinstance(first, dict):
            raise ValueError("choice is not an object")
        message = first.get("message") or {}
        if not isinstance(message, dict):
            raise ValueError("'message' is not an object")

        content = message.get("content")
        if content is None:
            content = first.get("text")
        if content is not None and not isinstance(content, str):
            raise ValueError("content is not a string")
        return content or ""

    async def complete(
        self, prompt: str, options: CompletionOptions | None = None
    ) -> str:
        """Generate a completion for a single user prompt.

        The system prompt from ``options``, if any, is sent as a leading
        system message.

        Args:
            prompt: User prompt text
            options: Optional request options

        Returns:
            Generated text, stripped of surrounding whitespace

        Raises:
            ProviderConnectionError: Connection/timeout issues
            ProviderAPIError: Error status or error body
        """
        messages: list[ChatMessage] = []
        if options is not None and options.system_prompt:
            messages.append(ChatMessage(role="system", content=options.system_prompt))
        messages.append(ChatMessage(role="user", content=prompt))
        return await self.chat(messages, options)

    async def chat(
        self, messages: list[ChatMessage], options: CompletionOptions | None = None
    ) -> str:
        """Generate a chat completion.

        Args:
            messages: Conversation messages in order
            options: Optional request options

        Returns:
            Generated text, stripped of surrounding whitespace

        Raises:
            ProviderConnectionError: Connection/timeout issues
            ProviderAPIError: Error status, error body or unparseable body
        """
        url = f"{self.base_url}/chat/completions"
        logger.debug(f"[{self.name}] POST {url} model={self.model}")

        response = await self._request(
            "POST", url, json_body=self._build_payload(messages, options)
        )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderAPIError(
                url, response.status_code, "Response body is not valid JSON"
            ) from e

        if not isinstance(data, dict):
            raise ProviderAPIError(
                url, response.status_code, "Unexpected response body"
            )

        error = data.get("error")
        if error:
            detail = error.get("message") if isinstance(error, dict) else str(error)
            raise ProviderAPIError(url, response.status_code, detail)

        try:
            content = self._extract_content(data).strip()
        except ValueError as e:
            raise ProviderAPIError(
                url, response.status_code, f"Unexpected response body: {e}"
            ) from e
        logger.debug(f"[{self.name}] Success, response length: {len(content)}")
        return content

    async def _get_json(self, url: str) -> Any | None:
        """GET a JSON document, returning None on any transport or API failure."""
        try:
            response = await self._request("GET", url)
            return response.json()
        except (ProviderConnectionError, ProviderAPIError, ValueError) as e:
            logger.debug(f"[{self.name}] GET {url} failed: {e}")
            return None
