"""Pytest configuration and shared fixtures for ThoughtCompletion tests."""

import os
import shutil
import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest

from thoughtcompletion.llm.types import ChatMessage, CompletionOptions

SAMPLE_DOCUMENT = """# My Document

## Introduction

This is the intro paragraph.

## Main Points
- First point
- Second point
  - Nested point

## Conclusion
"""


class RecordingProvider:
    """Completion provider double that records calls and returns canned replies.

    Replies are consumed in order; the last reply repeats. An Exception
    instance in the reply list is raised instead of returned.
    """

    name = "Recording"

    def __init__(self, *replies: "str | Exception") -> None:
        self.replies = list(replies) or [""]
        self.calls: list[tuple[str, CompletionOptions | None]] = []

    def _next_reply(self) -> str:
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def complete(
        self, prompt: str, options: CompletionOptions | None = None
    ) -> str:
        self.calls.append((prompt, options))
        return self._next_reply()

    async def chat(
        self, messages: list[ChatMessage], options: CompletionOptions | None = None
    ) -> str:
        self.calls.append((messages[-1].content, options))
        return self._next_reply()

    async def is_available(self) -> bool:
        return True


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test file operations.

    Yields:
        Path to temporary directory

    Cleanup:
        Automatically removes directory after test
    """
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def isolated_env() -> Iterator[dict[str, str]]:
    """Provide isolated environment variables for testing.

    Saves current environment and restores after test.

    Yields:
        Dictionary of original environment variables

    Cleanup:
        Restores original environment after test
    """
    original_env = os.environ.copy()
    yield original_env
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def isolated_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at an empty directory and clear THOUGHTCOMPLETION_* variables."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in list(os.environ):
        if name.startswith("THOUGHTCOMPLETION_"):
            monkeypatch.delenv(name)
    return home


@pytest.fixture
def sample_document() -> str:
    """A small markdown document with headers, bullets and a paragraph."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def recording_provider() -> RecordingProvider:
    """A provider double answering with an empty string."""
    return RecordingProvider("")


@pytest.fixture
def make_provider() -> type[RecordingProvider]:
    """Factory for provider doubles: ``make_provider("reply", ...)``."""
    return RecordingProvider
