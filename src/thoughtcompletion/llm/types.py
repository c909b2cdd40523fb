"""Completion provider interfaces.

The analysis and prompt layers depend only on these abstractions; no
provider-specific types leak through. Model listing is a separate, optional
capability detected by presence rather than inheritance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol, TypeGuard, runtime_checkable


@dataclass(frozen=True)
class CompletionOptions:
    """Options for a completion request.

    Unset values fall back to provider defaults.

    Attributes:
        system_prompt: System message prepended to the conversation.
        max_tokens: Maximum tokens to generate.
        temperature: Sampling temperature (0-2).
        stop_sequences: Sequences that end generation.
    """

    system_prompt: str | None = None
    max_tokens: int | None = None
    temperature: float | None = None
    stop_sequences: list[str] | None = field(default=None)


@dataclass(frozen=True)
class ChatMessage:
    """A single chat-completion message."""

    role: Literal["system", "user", "assistant"]
    content: str


@runtime_checkable
class CompletionProvider(Protocol):
    """Opaque text-generation capability.

    Implementations may raise ``ProviderError`` subclasses on transport or API
    failures and may return an empty string.
    """

    name: str

    async def complete(
        self, prompt: str, options: CompletionOptions | None = None
    ) -> str:
        """Generate a completion for a single user prompt.

        Args:
            prompt: User prompt text.
            options: Optional request options (system prompt, limits).

        Returns:
            Generated text, possibly empty.
        """
        ...

    async def chat(
        self, messages: list[ChatMessage], options: CompletionOptions | None = None
    ) -> str:
        """Generate a chat completion for a message list.

        Args:
            messages: Conversation messages in order.
            options: Optional request options.

        Returns:
            Generated text, possibly empty.
        """
        ...

    async def is_available(self) -> bool:
        """Check whether the provider is reachable and configured."""
        ...


@runtime_checkable
class ModelLister(Protocol):
    """Optional capability: enumerate models offered by a provider."""

    async def list_models(self) -> list[str]:
        """Return model identifiers, or an empty list when unavailable."""
        ...


def supports_model_listing(provider: object) -> TypeGuard[ModelLister]:
    """Whether ``provider`` offers the optional ``list_models`` capability."""
    return isinstance(provider, ModelLister)
