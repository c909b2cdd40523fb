"""CLI commands for document types.

Implements 'thoughtcompletion types', which lists the built-in and custom
document types, and 'thoughtcompletion detect-type', which asks the
configured model to classify a document.
"""

import asyncio

import click

from thoughtcompletion.cli.utils import (
    config_option,
    env_file_option,
    handle_cli_errors,
    load_cli_settings,
    quiet_option,
    read_document,
    verbose_option,
)
from thoughtcompletion.completion.service import CompletionService
from thoughtcompletion.lib.logging_config import get_logger, setup_logging
from thoughtcompletion.prompts.templates import (
    DEFAULT_DOCUMENT_TYPES,
    get_all_document_types,
)
from thoughtcompletion.prompts.type_detector import GENERAL_TYPE_NAME

logger = get_logger(__name__)


@click.command(name="types")
@config_option
@env_file_option
@click.option(
    "--details",
    "-d",
    is_flag=True,
    help="Show detection and working prompts",
)
@verbose_option
@quiet_option
def list_types(
    config: str | None,
    env_file: str | None,
    details: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """List available document types.

    Custom types from settings are marked; a custom type with the name of a
    built-in replaces it. The active type is marked with '*'.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    with handle_cli_errors("types"):
        settings = load_cli_settings(config, env_file=env_file)
        builtin_names = {t.name for t in DEFAULT_DOCUMENT_TYPES}
        custom_names = {t.name for t in settings.document_types}
        active = settings.active_document_type

        click.echo(f"Active document type: {active}")
        click.echo()
        for doc_type in get_all_document_types(settings.document_types):
            marker = "*" if doc_type.name == active else " "
            label = ""
            if doc_type.name in custom_names:
                label = (
                    " (custom, overrides built-in)"
                    if doc_type.name in builtin_names
                    else " (custom)"
                )
            click.echo(f"{marker} {doc_type.name}{label}")
            if details:
                click.echo(f"    detect: {doc_type.detection_prompt}")
                click.echo(f"    guide:  {doc_type.working_prompt}")


@click.command(name="detect-type")
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@config_option
@env_file_option
@verbose_option
@quiet_option
def detect_type(
    document: str,
    config: str | None,
    env_file: str | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Detect the document type of DOCUMENT with the configured model.

    Prints the type name, or 'general' when no type matches or detection
    fails.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    with handle_cli_errors("detect-type"):
        text = read_document(document)
        settings = load_cli_settings(config, env_file=env_file)
        service = CompletionService.from_settings(settings)
        doc_type = asyncio.run(service.detect_type(text))
        click.echo(doc_type.name if doc_type else GENERAL_TYPE_NAME)
