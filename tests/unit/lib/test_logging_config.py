"""Tests for logging configuration."""

import logging
from collections.abc import Iterator

import pytest

from thoughtcompletion.lib.logging_config import (
    ROOT_LOGGER_NAME,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Restore logger levels and handlers changed by setup_logging."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(root.handlers)
    level = root.level
    httpx_level = logging.getLogger("httpx").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_default_level_is_info(self) -> None:
        """Test the default level."""
        setup_logging()

        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.INFO

    def test_verbose(self) -> None:
        """Test that verbose enables debug and HTTP transport logs."""
        setup_logging(verbose=True)

        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.DEBUG

    def test_quiet(self) -> None:
        """Test that quiet shows warnings only."""
        setup_logging(quiet=True)

        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_verbose_wins_over_quiet(self) -> None:
        """Test flag precedence."""
        setup_logging(verbose=True, quiet=True)

        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.DEBUG

    def test_repeated_calls_do_not_duplicate_handlers(self) -> None:
        """Test that setup_logging replaces its own handler."""
        root = logging.getLogger(ROOT_LOGGER_NAME)
        before = len(root.handlers)

        setup_logging()
        setup_logging()
        setup_logging(verbose=True)

        assert len(root.handlers) <= before + 1


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger()."""

    def test_module_loggers_are_children(self) -> None:
        """Test that module loggers live under the package namespace."""
        logger = get_logger("thoughtcompletion.analysis.structure")

        assert logger.name.startswith(f"{ROOT_LOGGER_NAME}.")
        assert logger.parent is not None
