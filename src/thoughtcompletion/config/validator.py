"""Turn settings validation failures into messages about settings keys.

Messages name the key as it appears in the settings file (camelCase aliases
such as ``workingPrompt`` are reported as written) and, for entries of
``document_types``, the name of the offending custom type.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

# Pydantic prefixes messages raised from field validators with this text
VALUE_ERROR_PREFIX = "Value error, "


def _document_type_name(data: Mapping[str, Any] | None, index: int) -> str | None:
    """Name of the ``index``-th raw document type entry, if it has one."""
    if data is None:
        return None
    entries = data.get("document_types")
    if not isinstance(entries, Sequence) or isinstance(entries, str):
        return None
    if not 0 <= index < len(entries):
        return None
    entry = entries[index]
    if not isinstance(entry, Mapping):
        return None
    name = entry.get("name")
    return name.strip() if isinstance(name, str) and name.strip() else None


def describe_location(
    loc: tuple[int | str, ...], data: Mapping[str, Any] | None = None
) -> str:
    """Render an error location as a dotted settings key.

    Args:
        loc: Pydantic error location
        data: Raw settings mapping that failed validation, used to name the
            document type an error belongs to

    Returns:
        Dotted key, e.g. ``document_types.1.workingPrompt (type 'retro')``
    """
    path = ".".join(str(item) for item in loc) if loc else "settings"
    if len(loc) >= 2 and loc[0] == "document_types" and isinstance(loc[1], int):
        name = _document_type_name(data, loc[1])
        if name is not None:
            path = f"{path} (type '{name}')"
    return path


def _describe_problem(error: Mapping[str, Any]) -> str:
    error_type = error.get("type", "")
    if error_type == "missing":
        return "Required setting is missing"
    if error_type == "extra_forbidden":
        return "Unknown setting"

    msg = str(error.get("msg", "Unknown error"))
    if error_type == "value_error":
        msg = msg.removeprefix(VALUE_ERROR_PREFIX)
        return f"{msg} (received: {error.get('input')!r})"
    return msg


def flatten_pydantic_errors(
    exc: PydanticValidationError, data: Mapping[str, Any] | None = None
) -> list[str]:
    """Flatten a settings ValidationError into one message per failing key.

    Args:
        exc: Pydantic ValidationError raised while building ``Settings``
        data: The merged raw settings that were validated

    Returns:
        Human-readable messages

    Example:
        >>> try:
        ...     Settings(max_tokens=0)
        ... except PydanticValidationError as e:
        ...     flatten_pydantic_errors(e)
        ["Field 'max_tokens': Input should be greater than 0"]
    """
    messages = [
        f"Field '{describe_location(tuple(error.get('loc', ())), data)}': "
        f"{_describe_problem(error)}"
        for error in exc.errors()
    ]
    return messages or ["Settings validation failed"]
