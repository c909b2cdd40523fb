"""Tests for the OpenAI-compatible and Ollama providers.

HTTP traffic is served by ``httpx.MockTransport`` handlers; no network access
is needed.
"""

import json
import logging
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from thoughtcompletion.lib.errors import ProviderAPIError, ProviderConnectionError
from thoughtcompletion.llm.ollama_provider import OllamaProvider
from thoughtcompletion.llm.openai_provider import OpenAIProvider
from thoughtcompletion.llm.types import (
    ChatMessage,
    CompletionOptions,
    CompletionProvider,
    supports_model_listing,
)
from thoughtcompletion.models.config import OllamaConfig, OpenAIConfig

Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _chat_reply(content: Any, **extra: Any) -> dict[str, Any]:
    message = {"role": "assistant", "content": content, **extra}
    return {"choices": [{"message": message}]}


class _Recorder:
    """Collects requests and answers with a fixed response."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


def _openai(handler: Handler, **config: Any) -> OpenAIProvider:
    defaults: dict[str, Any] = {
        "base_url": "https://api.example.com/v1/",
        "api_key": "sk-test",
        "model": "gpt-4o-mini",
    }
    defaults.update(config)
    return OpenAIProvider(OpenAIConfig(**defaults), client=_client(handler))


def _ollama(handler: Handler) -> OllamaProvider:
    return OllamaProvider(OllamaConfig(), client=_client(handler))


@pytest.mark.unit
class TestOpenAIProviderChat:
    """Tests for OpenAI chat completions."""

    @pytest.mark.asyncio
    async def test_request_shape(self) -> None:
        """Test URL, auth header and payload defaults."""
        recorder = _Recorder(httpx.Response(200, json=_chat_reply("  Hello  ")))
        provider = _openai(recorder)

        result = await provider.complete("Continue:")

        assert result == "Hello"
        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.example.com/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        assert recorder.last_json == {
            "model": "gpt-4o-mini",
            "messages": [{"role": "user", "content": "Continue:"}],
            "max_tokens": 500,
            "temperature": 0.7,
        }

    @pytest.mark.asyncio
    async def test_system_prompt_and_options(self) -> None:
        """Test that options map onto the payload."""
        recorder = _Recorder(httpx.Response(200, json=_chat_reply("ok")))
        provider = _openai(recorder)

        await provider.complete(
            "user text",
            CompletionOptions(
                system_prompt="be brief",
                max_tokens=42,
                temperature=0.1,
                stop_sequences=["\n\n"],
            ),
        )

        payload = recorder.last_json
        assert payload["messages"] == [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "user text"},
        ]
        assert payload["max_tokens"] == 42
        assert payload["temperature"] == 0.1
        assert payload["stop"] == ["\n\n"]

    @pytest.mark.asyncio
    async def test_chat_messages_passed_through(self) -> None:
        """Test that chat sends the messages unchanged."""
        recorder = _Recorder(httpx.Response(200, json=_chat_reply("reply")))
        provider = _openai(recorder)

        await provider.chat(
            [
                ChatMessage(role="user", content="hi"),
                ChatMessage(role="assistant", content="hello"),
                ChatMessage(role="user", content="more"),
            ]
        )

        assert [m["role"] for m in recorder.last_json["messages"]] == [
            "user",
            "assistant",
            "user",
        ]

    @pytest.mark.asyncio
    async def test_no_auth_header_without_key(self) -> None:
        """Test that an empty API key sends no Authorization header."""
        recorder = _Recorder(httpx.Response(200, json=_chat_reply("ok")))
        provider = _openai(recorder, api_key="")

        await provider.complete("x")

        assert "Authorization" not in recorder.requests[0].headers

    @pytest.mark.asyncio
    async def test_text_fallback(self) -> None:
        """Test the legacy 'text' field when no message content is present."""
        recorder = _Recorder(
            httpx.Response(200, json={"choices": [{"text": " legacy "}]})
        )

        assert await _openai(recorder).complete("x") == "legacy"

    @pytest.mark.asyncio
    async def test_empty_choices(self) -> None:
        """Test that a reply without choices yields an empty string."""
        recorder = _Recorder(httpx.Response(200, json={"choices": []}))

        assert await _openai(recorder).complete("x") == ""

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        """Test that a non-2xx response raises ProviderAPIError."""
        recorder = _Recorder(httpx.Response(401, text="invalid api key"))

        with pytest.raises(ProviderAPIError) as exc_info:
            await _openai(recorder).complete("x")

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "invalid api key"
        assert "401" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_error_body(self) -> None:
        """Test that an error object in a 200 body raises ProviderAPIError."""
        recorder = _Recorder(
            httpx.Response(200, json={"error": {"message": "model not found"}})
        )

        with pytest.raises(ProviderAPIError, match="model not found"):
            await _openai(recorder).complete("x")

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        """Test that an unparseable body raises ProviderAPIError."""
        recorder = _Recorder(httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(ProviderAPIError, match="not valid JSON"):
            await _openai(recorder).complete("x")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("body", "problem"),
        [
            ({"choices": ["text"]}, "choice is not an object"),
            ({"choices": [{"message": "hi"}]}, "'message' is not an object"),
            ({"choices": {"message": {}}}, "'choices' is not a list"),
            ({"choices": [{"message": {"content": 42}}]}, "content is not a string"),
        ],
    )
    async def test_malformed_choices(self, body: dict[str, Any], problem: str) -> None:
        """Test that a wrongly shaped 200 body raises ProviderAPIError."""
        recorder = _Recorder(httpx.Response(200, json=body))

        with pytest.raises(ProviderAPIError) as exc_info:
            await _openai(recorder).complete("x")

        assert exc_info.value.status_code == 200
        assert exc_info.value.detail == f"Unexpected response body: {problem}"

    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        """Test that transport failures raise ProviderConnectionError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ProviderConnectionError) as exc_info:
            await _openai(handler).complete("x")

        assert exc_info.value.endpoint == "https://api.example.com/v1"
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Test that timeouts raise ProviderConnectionError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ProviderConnectionError):
            await _openai(handler).complete("x")


@pytest.mark.unit
class TestOpenAIProviderModels:
    """Tests for availability and model listing."""

    @pytest.mark.asyncio
    async def test_list_models(self) -> None:
        """Test that model ids are read from the data list."""
        recorder = _Recorder(
            httpx.Response(200, json={"data": [{"id": "gpt-4o"}, {"id": "o3-mini"}]})
        )
        provider = _openai(recorder)

        assert await provider.list_models() == ["gpt-4o", "o3-mini"]
        assert str(recorder.requests[0].url) == "https://api.example.com/v1/models"
        assert recorder.requests[0].method == "GET"

    @pytest.mark.asyncio
    async def test_list_models_failure(self) -> None:
        """Test that a failed listing yields an empty list."""
        recorder = _Recorder(httpx.Response(500, text="down"))

        assert await _openai(recorder).list_models() == []

    @pytest.mark.asyncio
    async def test_is_available(self) -> None:
        """Test availability via the models endpoint."""
        ok = _Recorder(httpx.Response(200, json={"data": []}))
        denied = _Recorder(httpx.Response(401, text="no"))

        assert await _openai(ok).is_available() is True
        assert await _openai(denied).is_available() is False

    @pytest.mark.asyncio
    async def test_is_available_connection_error(self) -> None:
        """Test that an unreachable server is reported unavailable."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        assert await _openai(handler).is_available() is False


@pytest.mark.unit
class TestOllamaProvider:
    """Tests for the Ollama provider."""

    @pytest.mark.asyncio
    async def test_chat_endpoint_without_auth(self) -> None:
        """Test that chat uses the OpenAI-compatible endpoint without auth."""
        recorder = _Recorder(httpx.Response(200, json=_chat_reply("local reply")))
        provider = _ollama(recorder)

        assert await provider.complete("x") == "local reply"
        request = recorder.requests[0]
        assert str(request.url) == "http://localhost:11434/v1/chat/completions"
        assert "Authorization" not in request.headers
        assert recorder.last_json["model"] == "llama3.2"

    @pytest.mark.asyncio
    async def test_error_string_body(self) -> None:
        """Test that Ollama's string error field raises ProviderAPIError."""
        recorder = _Recorder(
            httpx.Response(200, json={"error": "model 'llama9' not found"})
        )

        with pytest.raises(ProviderAPIError, match="model 'llama9' not found"):
            await _ollama(recorder).complete("x")

    @pytest.mark.asyncio
    async def test_reasoning_without_content_warns(self, caplog: Any) -> None:
        """Test the warning for thinking models that exhaust the token budget."""
        recorder = _Recorder(
            httpx.Response(200, json=_chat_reply("", reasoning="thinking..."))
        )

        with caplog.at_level(logging.WARNING, logger="thoughtcompletion"):
            result = await _ollama(recorder).complete("x")

        assert result == ""
        assert "returned reasoning but no content" in caplog.text

    @pytest.mark.asyncio
    async def test_list_models_uses_native_api(self) -> None:
        """Test that model listing uses /api/tags outside the /v1 prefix."""
        recorder = _Recorder(
            httpx.Response(
                200, json={"models": [{"name": "llama3.2:latest"}, {"name": "qwen3"}]}
            )
        )
        provider = _ollama(recorder)

        assert await provider.list_models() == ["llama3.2:latest", "qwen3"]
        assert str(recorder.requests[0].url) == "http://localhost:11434/api/tags"

    @pytest.mark.parametrize(
        ("base_url", "native"),
        [
            ("http://v1.internal:11434/v1", "http://v1.internal:11434"),
            ("http://gpu-box:11434/v1/", "http://gpu-box:11434"),
            ("http://proxy/ollama/v1", "http://proxy/ollama"),
            ("http://localhost:11434", "http://localhost:11434"),
        ],
    )
    def test_native_base_url(self, base_url: str, native: str) -> None:
        """Test that only the trailing /v1 prefix is removed."""
        provider = OllamaProvider(OllamaConfig(base_url=base_url))

        assert provider.native_base_url == native

    @pytest.mark.asyncio
    async def test_is_available(self) -> None:
        """Test availability via /api/tags."""
        ok = _Recorder(httpx.Response(200, json={"models": []}))
        down = _Recorder(httpx.Response(503, text="loading"))

        assert await _ollama(ok).is_available() is True
        assert await _ollama(down).is_available() is False

    @pytest.mark.asyncio
    async def test_list_models_connection_error(self) -> None:
        """Test that an unreachable server lists no models."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        assert await _ollama(handler).list_models() == []


@pytest.mark.unit
class TestCapabilities:
    """Tests for the provider protocol and the optional listing capability."""

    def test_providers_satisfy_protocol(self) -> None:
        """Test that both providers implement the completion capability."""
        assert isinstance(OpenAIProvider(OpenAIConfig()), CompletionProvider)
        assert isinstance(OllamaProvider(OllamaConfig()), CompletionProvider)

    def test_model_listing_detected_by_presence(self, make_provider: Any) -> None:
        """Test the presence check for list_models."""
        assert supports_model_listing(OllamaProvider(OllamaConfig()))
        assert not supports_model_listing(make_provider("x"))

    def test_trailing_slash_removed(self) -> None:
        """Test base URL normalization."""
        provider = OpenAIProvider(OpenAIConfig(base_url="http://localhost:1234/v1/"))

        assert provider.base_url == "http://localhost:1234/v1"
