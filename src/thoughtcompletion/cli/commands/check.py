"""CLI command for checking the configured completion provider."""

import asyncio

import click

from thoughtcompletion.cli.utils import (
    config_option,
    env_file_option,
    handle_cli_errors,
    load_cli_settings,
    quiet_option,
    verbose_option,
)
from thoughtcompletion.lib.errors import ProviderConnectionError
from thoughtcompletion.lib.logging_config import get_logger, setup_logging
from thoughtcompletion.llm.provider_factory import create_provider_from_settings
from thoughtcompletion.llm.types import supports_model_listing

logger = get_logger(__name__)


@click.command()
@config_option
@env_file_option
@verbose_option
@quiet_option
def check(
    config: str | None,
    env_file: str | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Check that the configured provider is reachable.

    Lists the provider's models when it supports model listing. Exits with
    code 2 when the provider cannot be reached.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    with handle_cli_errors("check"):
        settings = load_cli_settings(config, env_file=env_file)
        provider_config = settings.active_provider_config()
        provider = create_provider_from_settings(settings)

        click.echo(f"Provider: {provider.name}")
        click.echo(f"  Base URL: {provider_config.base_url}")
        click.echo(f"  Model:    {provider_config.model}")

        if not asyncio.run(provider.is_available()):
            raise ProviderConnectionError(provider_config.base_url)

        click.secho("  Status:   available", fg="green")

        if supports_model_listing(provider):
            models = asyncio.run(provider.list_models())
            click.echo(f"  Models:   {len(models)}")
            for name in models:
                click.echo(f"    - {name}")
            if models and provider_config.model not in models:
                click.secho(
                    f"  Warning: configured model '{provider_config.model}' "
                    f"was not listed by the provider",
                    fg="yellow",
                )
