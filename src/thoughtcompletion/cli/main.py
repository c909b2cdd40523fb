"""ThoughtCompletion command-line entry point."""

import click

from thoughtcompletion import __version__
from thoughtcompletion.cli.commands.check import check
from thoughtcompletion.cli.commands.complete import complete, prompt
from thoughtcompletion.cli.commands.types import detect_type, list_types


@click.group()
@click.version_option(version=__version__, prog_name="thoughtcompletion")
def main() -> None:
    """ThoughtCompletion - structure-aware writing completions.

    Analyzes a markdown or plain text document around a cursor position and
    asks an OpenAI-compatible or Ollama model for either new structure
    (headers, bullets) or scaffolding for the current point.
    """
    pass


main.add_command(complete)
main.add_command(prompt)
main.add_command(detect_type)
main.add_command(list_types)
main.add_command(check)


if __name__ == "__main__":
    main()
