"""CLI commands that run the completion pipeline on a document.

Implements 'thoughtcompletion complete', which prints a generated
continuation, and 'thoughtcompletion prompt', which prints the prompt that
would be sent to the model.
"""

import asyncio
from collections.abc import Callable
from typing import Any

import click

from thoughtcompletion.analysis.position import CursorPosition
from thoughtcompletion.cli.utils import (
    config_option,
    env_file_option,
    handle_cli_errors,
    load_cli_settings,
    quiet_option,
    read_document,
    verbose_option,
)
from thoughtcompletion.completion.service import CompletionRequest, CompletionService
from thoughtcompletion.lib.logging_config import get_logger, setup_logging
from thoughtcompletion.lib.token_counter import TokenCounter

logger = get_logger(__name__)

MODE_CHOICES = [mode.value for mode in CursorPosition]


def _cursor_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the FILE argument and cursor/type/mode options."""
    func = click.option(
        "--type",
        "-t",
        "document_type",
        default=None,
        help="Document type name, or 'auto' to detect (overrides settings)",
    )(func)
    func = click.option(
        "--mode",
        "-m",
        type=click.Choice(MODE_CHOICES),
        default=None,
        help="Force structure or content mode instead of detecting it",
    )(func)
    func = click.option(
        "--column",
        type=click.IntRange(min=0),
        required=True,
        help="Zero-based cursor column",
    )(func)
    func = click.option(
        "--line",
        type=click.IntRange(min=0),
        required=True,
        help="Zero-based cursor line",
    )(func)
    func = click.argument(
        "document", type=click.Path(exists=True, dir_okay=False)
    )(func)
    return func


def _build_service(
    config: str | None,
    document_type: str | None,
    env_file: str | None,
    mode: str | None,
) -> CompletionService:
    settings = load_cli_settings(config, document_type, env_file)
    service = CompletionService.from_settings(settings)
    if mode:
        service.set_forced_mode(mode)
    return service


@click.command()
@_cursor_options
@config_option
@env_file_option
@verbose_option
@quiet_option
def complete(
    document: str,
    line: int,
    column: int,
    mode: str | None,
    document_type: str | None,
    config: str | None,
    env_file: str | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Generate a completion at a cursor position in DOCUMENT.

    DOCUMENT is the path to a markdown or plain text file.

    \b
    EXAMPLES:

        thoughtcompletion complete notes.md --line 7 --column 8

        thoughtcompletion complete plan.md --line 12 --column 0 --mode structure

        thoughtcompletion complete deal.md --line 3 --column 0 --type negotiation
    """
    setup_logging(verbose=verbose, quiet=quiet)
    logger.debug(
        f"Complete command invoked: document={document}, line={line}, "
        f"column={column}, mode={mode}, type={document_type}"
    )

    with handle_cli_errors("complete"):
        text = read_document(document)
        service = _build_service(config, document_type, env_file, mode)
        completion = asyncio.run(
            service.generate(CompletionRequest(text=text, line=line, column=column))
        )

        if not completion:
            click.secho("No completion produced", fg="yellow", err=True)
            return

        click.echo(completion)


@click.command()
@_cursor_options
@config_option
@env_file_option
@click.option(
    "--tokens",
    is_flag=True,
    help="Report token counts (cl100k_base) for the built prompt",
)
@verbose_option
@quiet_option
def prompt(
    document: str,
    line: int,
    column: int,
    mode: str | None,
    document_type: str | None,
    config: str | None,
    env_file: str | None,
    tokens: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Show the prompt that would be sent for a cursor position in DOCUMENT.

    No completion is generated. With an explicit --type no model is called at
    all; with 'auto' the model is still asked to detect the document type.

    \b
    EXAMPLES:

        thoughtcompletion prompt notes.md --line 7 --column 8 --type general

        thoughtcompletion prompt notes.md --line 0 --column 0 --tokens
    """
    setup_logging(verbose=verbose, quiet=quiet)

    with handle_cli_errors("prompt"):
        text = read_document(document)
        service = _build_service(config, document_type, env_file, mode)
        built = asyncio.run(
            service.build_request_prompt(
                CompletionRequest(text=text, line=line, column=column)
            )
        )

        click.secho("=== SYSTEM PROMPT ===", bold=True)
        click.echo(built.system_prompt)
        click.echo()
        click.secho("=== USER PROMPT ===", bold=True)
        click.echo(built.user_prompt)

        if tokens:
            counter = TokenCounter()
            system_tokens = counter.count(built.system_prompt)
            user_tokens = counter.count(built.user_prompt)
            click.echo()
            click.echo(
                f"Tokens: system={system_tokens} user={user_tokens} "
                f"total={system_tokens + user_tokens}"
            )
