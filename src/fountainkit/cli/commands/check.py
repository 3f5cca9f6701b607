"""Formatting checks, automatic fixes and document statistics."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from fountainkit.cli.commands.normalize import InputFile, OutputFile
from fountainkit.cli.formatters import FormatFormatter, OutputFormat
from fountainkit.cli.utils.cli_handler import CLIHandler, cli_command
from fountainkit.normalizer import (
    correct_fountain_content,
    smart_format,
    validate_fountain_content,
)
from fountainkit.parser.document import (
    count_words,
    estimate_page_count,
    get_character_count,
)

console = Console(stderr=True)


@cli_command
def check_command(
    file: InputFile = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Report formatting problems such as NAME: dialogue or lowercase headings.

    Exit code 1 means issues were found.

    Examples:
        fountainkit check pasted.txt
        fountainkit check draft.fountain --json
    """
    handler = CLIHandler(console)
    report = validate_fountain_content(handler.read_input(file))
    FormatFormatter().display(report, OutputFormat.from_flag(json_output))
    if not report.is_valid:
        raise typer.Exit(1)


@cli_command
def fix_command(
    file: InputFile = None,
    output: OutputFile = None,
    smart: Annotated[
        bool,
        typer.Option(
            "--smart",
            help="Only fix headings, cue case and spacing; leave other lines as written",
        ),
    ] = False,
) -> None:
    """Apply the suggested fixes from ``check`` and enforce spacing.

    Examples:
        fountainkit fix pasted.txt -o pasted.fountain
        fountainkit fix draft.fountain --smart
    """
    handler = CLIHandler(console)
    content = handler.read_input(file)
    if smart:
        handler.write_output(smart_format(content), output)
        return

    result = correct_fountain_content(content, validate_fountain_content(content).issues)
    handler.write_output(result.corrected_content, output)
    console.print(f"Applied {result.change_count} fixes", highlight=False)


@cli_command
def stats_command(
    file: InputFile = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show estimated pages, words and characters."""
    handler = CLIHandler(console)
    content = handler.read_input(file)
    characters = get_character_count(content)
    stats = {
        "pages": estimate_page_count(content),
        "words": count_words(content),
        "characters": characters.with_spaces,
        "characters_without_spaces": characters.without_spaces,
    }
    FormatFormatter().display(stats, OutputFormat.from_flag(json_output))
