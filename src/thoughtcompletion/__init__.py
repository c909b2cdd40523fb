"""ThoughtCompletion - document-aware thinking completions.

ThoughtCompletion analyzes a markdown or plain text document at the cursor
and builds prompts that ask a language model for either new structure or
Socratic scaffolding for the current point, adapted to the document's type.

Main features:
- Line-level structure extraction and cursor classification
- Built-in and custom document types with model-based detection
- OpenAI-compatible and Ollama providers
- YAML settings with environment overrides
"""

from thoughtcompletion.analysis.document_context import (
    DocumentContext,
    analyze_document,
)
from thoughtcompletion.lib.errors import ConfigError, ThoughtCompletionError
from thoughtcompletion.prompts.builder import build_prompt, build_prompt_for_mode

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConfigError",
    "DocumentContext",
    "ThoughtCompletionError",
    "analyze_document",
    "build_prompt",
    "build_prompt_for_mode",
]
