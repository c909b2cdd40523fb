"""Logging configuration for ThoughtCompletion.

All modules obtain their logger through ``get_logger(__name__)`` so that the
whole ``thoughtcompletion`` namespace can be reconfigured at once from CLI
flags via ``setup_logging``.
"""

import logging
import sys

ROOT_LOGGER_NAME = "thoughtcompletion"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Chatty transport loggers kept quiet unless running verbose
THIRD_PARTY_LOGGERS = ("httpx", "httpcore")

_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Module ``__name__``.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the ThoughtCompletion logger namespace.

    Level resolution: ``verbose`` wins over ``quiet``; DEBUG when verbose,
    WARNING when quiet, INFO otherwise. Safe to call repeatedly; the previously
    installed handler is replaced rather than duplicated.

    Args:
        verbose: Enable debug output, including HTTP transport logs.
        quiet: Only show warnings and errors.
    """
    global _handler

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(_handler)
    root.setLevel(level)

    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
