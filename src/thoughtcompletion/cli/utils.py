"""Helpers shared by the CLI commands."""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import click

from thoughtcompletion.config.loader import load_settings
from thoughtcompletion.lib.errors import (
    ConfigError,
    FileNotFoundError,
    ProviderError,
)
from thoughtcompletion.lib.logging_config import get_logger
from thoughtcompletion.models.config import Settings

logger = get_logger(__name__)


def read_document(path: str | Path) -> str:
    """Read a document as UTF-8 text.

    Raises:
        click.FileError: If the file is not valid UTF-8
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise click.FileError(str(path), hint="not a UTF-8 text file") from e


def load_cli_settings(
    config: str | None = None,
    document_type: str | None = None,
    env_file: str | None = None,
) -> Settings:
    """Load settings, applying CLI flags as the highest-precedence overrides.

    Args:
        config: Optional explicit settings file
        document_type: Optional ``--type`` value
        env_file: Optional .env file

    Returns:
        Validated settings
    """
    overrides: dict[str, Any] = {}
    if document_type:
        overrides["active_document_type"] = document_type
    return load_settings(config_path=config, overrides=overrides, env_file=env_file)


@contextmanager
def handle_cli_errors(command_name: str) -> Iterator[None]:
    """Map errors raised by a command body to messages and exit codes.

    Exit codes: 1 for configuration and document errors, 2 for provider
    errors, 130 when interrupted.
    """
    try:
        yield
    except (ConfigError, FileNotFoundError) as e:
        logger.error(f"{command_name}: configuration error: {e}", exc_info=True)
        click.secho("Error: Failed to load configuration", fg="red", err=True)
        click.echo(f"  {str(e)}", err=True)
        sys.exit(1)
    except ProviderError as e:
        logger.error(f"{command_name}: provider error: {e}", exc_info=True)
        click.secho("Error: Completion provider failed", fg="red", err=True)
        click.echo(f"  {str(e)}", err=True)
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info(f"{command_name} interrupted by user (Ctrl+C)")
        click.echo(err=True)
        click.secho("Interrupted", fg="yellow", err=True)
        sys.exit(130)
    except click.ClickException:
        raise
    except Exception as e:
        logger.error(f"{command_name}: unexpected error: {e}", exc_info=True)
        click.secho(f"Error: {str(e)}", fg="red", err=True)
        sys.exit(1)


verbose_option = click.option(
    "--verbose", "-v", is_flag=True, help="Enable debug logging"
)
quiet_option = click.option(
    "--quiet", "-q", is_flag=True, help="Only log warnings and errors"
)
config_option = click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Settings file (default: project and user settings)",
)
env_file_option = click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Load environment variables from this .env file",
)
