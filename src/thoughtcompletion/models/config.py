"""Settings models for ThoughtCompletion.

These models mirror the settings the editor extension exposes: which
completion provider to use and how to reach it, how completions are
triggered, and which document type (or ``auto``) is active.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from thoughtcompletion.models.document_type import DocumentType


class ProviderEnum(str, Enum):
    """Supported completion provider backends."""

    OPENAI = "openai"
    OLLAMA = "ollama"


class TriggerMode(str, Enum):
    """How completions are triggered.

    Attributes:
        AUTO: Respond to automatic (typing) and explicit triggers.
        MANUAL: Respond to explicit invocations only.
    """

    AUTO = "auto"
    MANUAL = "manual"


class OpenAIConfig(BaseModel):
    """Connection settings for an OpenAI-compatible endpoint.

    Works with the OpenAI API, LM Studio, LocalAI and similar servers.
    """

    model_config = ConfigDict(extra="forbid")

    type: Literal["openai"] = Field(default="openai", description="Provider type")
    base_url: str = Field(
        default="https://api.openai.com/v1", description="API base URL"
    )
    api_key: str = Field(default="", description="Bearer token for the API")
    model: str = Field(default="gpt-4o-mini", description="Model identifier")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v


class OllamaConfig(BaseModel):
    """Connection settings for a local Ollama server (OpenAI-compatible API)."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["ollama"] = Field(default="ollama", description="Provider type")
    base_url: str = Field(
        default="http://localhost:11434/v1", description="API base URL"
    )
    model: str = Field(default="llama3.2", description="Model identifier")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v


ProviderConfig = OpenAIConfig | OllamaConfig


class Settings(BaseModel):
    """Complete ThoughtCompletion settings.

    Attributes:
        provider: Which provider section is active.
        openai: OpenAI-compatible provider settings.
        ollama: Ollama provider settings.
        auto_complete: Whether completions are enabled at all.
        trigger_mode: ``auto`` or ``manual`` triggering.
        completion_delay: Debounce delay in milliseconds used by editor
            integrations before an automatic request. The CLI and the
            completion service do not read it; it is kept so that editor
            settings files validate.
        max_tokens: Maximum tokens requested for a completion.
        request_timeout: HTTP timeout in seconds for provider calls.
        active_document_type: ``auto`` or the name of a document type.
        document_types: User-defined document types; a custom type named like
            a built-in replaces it.
    """

    model_config = ConfigDict(extra="forbid")

    provider: ProviderEnum = Field(default=ProviderEnum.OLLAMA)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    auto_complete: bool = Field(default=True)
    trigger_mode: TriggerMode = Field(default=TriggerMode.AUTO)
    completion_delay: int = Field(
        default=2500,
        ge=0,
        description="Editor debounce delay in ms; not used by the CLI or service",
    )
    max_tokens: int = Field(default=1000, gt=0)
    request_timeout: float = Field(default=60.0, gt=0)
    active_document_type: str = Field(default="auto")
    document_types: list[DocumentType] = Field(default_factory=list)

    @field_validator("active_document_type")
    @classmethod
    def validate_active_document_type(cls, v: str) -> str:
        """Require a non-empty type name."""
        if not v.strip():
            raise ValueError("active_document_type must be 'auto' or a type name")
        return v.strip()

    @field_validator("document_types")
    @classmethod
    def validate_unique_names(cls, v: list[DocumentType]) -> list[DocumentType]:
        """Reject duplicate custom type names."""
        seen: set[str] = set()
        for doc_type in v:
            if doc_type.name in seen:
                raise ValueError(f"Duplicate document type name: {doc_type.name}")
            seen.add(doc_type.name)
        return v

    def active_provider_config(self) -> ProviderConfig:
        """Return the connection settings for the selected provider."""
        if self.provider == ProviderEnum.OPENAI:
            return self.openai
        return self.ollama
