"""Completion service: turns an editor request into a single completion.

Applies the trigger rules (enabled flag, manual mode, mid-word suppression),
resolves the document type through the revision cache, builds the prompt and
calls the provider. Every failure after the trigger checks is logged and
reported as "no completion".
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from thoughtcompletion.analysis.document_context import analyze_document
from thoughtcompletion.analysis.position import CursorPosition, classify_position
from thoughtcompletion.analysis.structure import column_to_index, line_at, split_lines
from thoughtcompletion.completion.cache import (
    CacheKey,
    DocumentTypeCache,
    custom_types_key,
)
from thoughtcompletion.config.defaults import COMPLETION_TEMPERATURE
from thoughtcompletion.lib.logging_config import get_logger
from thoughtcompletion.llm.provider_factory import create_provider_from_settings
from thoughtcompletion.llm.types import CompletionOptions, CompletionProvider
from thoughtcompletion.models.config import Settings, TriggerMode
from thoughtcompletion.models.document_type import DocumentType
from thoughtcompletion.prompts.builder import (
    BuiltPrompt,
    build_prompt,
    build_prompt_for_mode,
)
from thoughtcompletion.prompts.type_detector import AUTO_DETECT, resolve_document_type

logger = get_logger(__name__)


class TriggerKind(str, Enum):
    """Why a completion was requested.

    Attributes:
        AUTOMATIC: The editor asked while the user was typing.
        INVOKE: The user asked explicitly (shortcut or command).
    """

    AUTOMATIC = "automatic"
    INVOKE = "invoke"


@dataclass(frozen=True)
class CompletionRequest:
    """A completion request for one cursor position.

    Attributes:
        text: Full document text.
        line: Zero-based cursor line.
        column: Cursor column in UTF-16 code units.
        revision: Document revision; the type cache is keyed on it.
        trigger_kind: What triggered the request.
    """

    text: str
    line: int
    column: int
    revision: int = 0
    trigger_kind: TriggerKind = TriggerKind.INVOKE


def is_mid_word(text: str, line: int, column: int) -> bool:
    """Whether a non-whitespace character follows the cursor on its line."""
    current = line_at(split_lines(text), line)
    index = column_to_index(current, column)
    return index < len(current) and not current[index].isspace()


class CompletionService:
    """Produces completions for editor requests.

    Example:
        >>> service = CompletionService.from_settings(settings)
        >>> text = await service.provide_completion(
        ...     CompletionRequest(text=doc, line=7, column=8)
        ... )
    """

    def __init__(
        self,
        llm: CompletionProvider,
        custom_types: Iterable[DocumentType] = (),
        active_type_name: str = AUTO_DETECT,
        enabled: bool = True,
        trigger_mode: TriggerMode = TriggerMode.AUTO,
        max_tokens: int = 1000,
    ) -> None:
        """Initialize the service.

        Args:
            llm: Completion provider
            custom_types: User-defined document types
            active_type_name: ``"auto"`` or a document type name
            enabled: Whether completions are produced at all
            trigger_mode: ``auto`` or ``manual`` triggering
            max_tokens: Maximum tokens requested per completion
        """
        self.llm = llm
        self.custom_types = list(custom_types)
        self.active_type_name = active_type_name
        self.enabled = enabled
        self.trigger_mode = TriggerMode(trigger_mode)
        self.max_tokens = max_tokens
        self._forced_mode: CursorPosition | None = None
        self._type_cache = DocumentTypeCache()

    @classmethod
    def from_settings(
        cls, settings: Settings, llm: CompletionProvider | None = None
    ) -> "CompletionService":
        """Create a service from validated settings.

        Args:
            settings: Loaded settings
            llm: Optional provider; built from settings when omitted

        Returns:
            Configured service

        Raises:
            UnknownProviderError: If the configured provider is unsupported
        """
        return cls(
            llm=llm or create_provider_from_settings(settings),
            custom_types=settings.document_types,
            active_type_name=settings.active_document_type,
            enabled=settings.auto_complete,
            trigger_mode=settings.trigger_mode,
            max_tokens=settings.max_tokens,
        )

    @property
    def forced_mode(self) -> CursorPosition | None:
        """Mode the next request will use, if one was forced."""
        return self._forced_mode

    def update_config(
        self,
        llm: CompletionProvider | None = None,
        custom_types: Iterable[DocumentType] | None = None,
        active_type_name: str | None = None,
        enabled: bool | None = None,
        trigger_mode: TriggerMode | None = None,
        max_tokens: int | None = None,
    ) -> None:
        """Replace configuration values and drop the cached document type.

        Arguments left as None keep their current value.
        """
        if llm is not None:
            self.llm = llm
        if custom_types is not None:
            self.custom_types = list(custom_types)
        if active_type_name is not None:
            self.active_type_name = active_type_name
        if enabled is not None:
            self.enabled = enabled
        if trigger_mode is not None:
            self.trigger_mode = TriggerMode(trigger_mode)
        if max_tokens is not None:
            self.max_tokens = max_tokens
        self._type_cache.clear()
        logger.debug("Completion service configuration updated")

    def set_forced_mode(self, mode: CursorPosition | str | None) -> None:
        """Force the mode of the next request; consumed after one use."""
        self._forced_mode = CursorPosition(mode) if mode is not None else None

    def _should_skip(self, request: CompletionRequest) -> bool:
        if not self.enabled:
            logger.debug("Completions disabled, skipping")
            return True

        if request.trigger_kind != TriggerKind.AUTOMATIC:
            return False

        if self.trigger_mode == TriggerMode.MANUAL:
            logger.debug("Manual trigger mode, ignoring automatic trigger")
            return True

        if is_mid_word(request.text, request.line, request.column):
            logger.debug("Cursor is mid-word, skipping")
            return True

        return False

    async def _resolve_type(self, request: CompletionRequest) -> DocumentType | None:
        key = CacheKey(
            revision=request.revision,
            active_type_name=self.active_type_name,
            custom_types_hash=custom_types_key(self.custom_types),
        )
        return await self._type_cache.get_or_resolve(
            key,
            lambda: resolve_document_type(
                request.text, self.active_type_name, self.custom_types, self.llm
            ),
        )

    async def build_request_prompt(self, request: CompletionRequest) -> BuiltPrompt:
        """Resolve the document type and build the prompt for a request.

        Consumes the forced mode, if one is set.

        Args:
            request: The completion request

        Returns:
            System and user prompt
        """
        doc_type = await self._resolve_type(request)
        context = analyze_document(request.text, request.line, request.column, doc_type)

        classification = classify_position(
            split_lines(request.text), request.line, request.column
        )
        logger.debug(
            f"Cursor mode={classification.mode.value}, "
            f"structure_hint={classification.continue_structure_hint}, "
            f"content_hint={classification.fill_content_hint}"
        )

        if self._forced_mode is not None:
            mode = self._forced_mode
            self._forced_mode = None
            logger.debug(f"Using forced mode: {mode.value}")
            return build_prompt_for_mode(context, mode)
        return build_prompt(context)

    async def generate(self, request: CompletionRequest) -> str:
        """Build the prompt and call the provider, without trigger checks.

        Args:
            request: The completion request

        Returns:
            Completion text, possibly empty

        Raises:
            ProviderError: If the provider call fails
        """
        prompt = await self.build_request_prompt(request)
        logger.debug(f"Calling {self.llm.name} with max_tokens={self.max_tokens}")
        return await self.llm.complete(
            prompt.user_prompt,
            CompletionOptions(
                system_prompt=prompt.system_prompt,
                max_tokens=self.max_tokens,
                temperature=COMPLETION_TEMPERATURE,
            ),
        )

    async def provide_completion(self, request: CompletionRequest) -> str | None:
        """Produce a completion for an editor request.

        Args:
            request: The completion request

        Returns:
            Completion text, or None when skipped, empty or failed
        """
        if self._should_skip(request):
            return None

        try:
            completion = await self.generate(request)
        except Exception as e:
            logger.error(f"Completion failed: {e}", exc_info=True)
            return None

        return completion or None

    async def detect_type(self, text: str) -> DocumentType | None:
        """Run automatic type detection on ``text``, bypassing the cache."""
        return await resolve_document_type(
            text, AUTO_DETECT, self.custom_types, self.llm
        )
