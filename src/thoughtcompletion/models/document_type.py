"""Document type model.

A document type is a named behavioral profile: a detection prompt used to ask
a model whether a document matches, and a working prompt injected into
generation prompts once the type is active.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DocumentType(BaseModel):
    """Named behavioral profile that biases prompts toward a domain.

    Names are case-sensitive for storage and lookup by explicit selection, and
    matched case-insensitively against model output during detection.

    Settings files written for the editor extension use camelCase keys, so
    ``detectionPrompt`` and ``workingPrompt`` are accepted as aliases.

    Example:
        >>> DocumentType(
        ...     name="retro",
        ...     detection_prompt="Sprint retrospective notes",
        ...     working_prompt="Separate what went well from what to change.",
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str = Field(..., description="Unique type identifier")
    detection_prompt: str = Field(
        ...,
        alias="detectionPrompt",
        description="Description used to ask a model whether a document matches",
    )
    working_prompt: str = Field(
        ...,
        alias="workingPrompt",
        description="Guidance injected into generation prompts for this type",
    )

    @field_validator("name", "detection_prompt", "working_prompt")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty or whitespace-only values."""
        if not v or not v.strip():
            raise ValueError("must be a non-empty string")
        return v
