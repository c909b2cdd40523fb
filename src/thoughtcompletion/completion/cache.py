"""Single-entry memo for resolved document types.

Type detection costs one model call, so the resolved type is reused while
the document revision and the type configuration stay the same.
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import NamedTuple

from thoughtcompletion.lib.logging_config import get_logger
from thoughtcompletion.models.document_type import DocumentType

logger = get_logger(__name__)


class CacheKey(NamedTuple):
    """Identity of a type resolution."""

    revision: int
    active_type_name: str
    custom_types_hash: int


def custom_types_key(custom_types: Iterable[DocumentType]) -> int:
    """Hash the custom type records, order included."""
    return hash(tuple(custom_types))


class DocumentTypeCache:
    """Remembers the last resolved document type and the key it was resolved for.

    A stored ``None`` ("general") is a valid cached result.
    """

    def __init__(self) -> None:
        self._key: CacheKey | None = None
        self._value: DocumentType | None = None

    @property
    def key(self) -> CacheKey | None:
        """Key of the cached entry, or None when empty."""
        return self._key

    async def get_or_resolve(
        self,
        key: CacheKey,
        resolver: Callable[[], Awaitable[DocumentType | None]],
    ) -> DocumentType | None:
        """Return the cached type for ``key`` or resolve and store it.

        Args:
            key: Resolution identity
            resolver: Zero-argument coroutine function doing the resolution

        Returns:
            The resolved type, or None for general
        """
        if self._key == key:
            logger.debug(f"Document type cache hit for revision {key.revision}")
            return self._value

        value = await resolver()
        self._key = key
        self._value = value
        return value

    def clear(self) -> None:
        """Drop the cached entry."""
        self._key = None
        self._value = None
