"""Text normalization commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from fountainkit.cli.utils.cli_handler import CLIHandler, cli_command
from fountainkit.config import get_logger
from fountainkit.normalizer import (
    detect_encoding_issues,
    enforce_fountain_spacing,
    fix_character_encoding,
    normalize_screenplay_text,
)

logger = get_logger(__name__)
console = Console(stderr=True)

InputFile = Annotated[
    Path | None,
    typer.Argument(help="Fountain file to read (reads stdin when omitted)"),
]
OutputFile = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write the result here instead of stdout"),
]


@cli_command
def normalize_command(
    file: InputFile = None,
    output: OutputFile = None,
    no_spacing: Annotated[
        bool,
        typer.Option("--no-spacing", help="Skip blank-line enforcement"),
    ] = False,
) -> None:
    """Repair encoding, unwrap soft-wrapped lines and fix spacing.

    Examples:
        fountainkit normalize pasted.fountain
        fountainkit normalize draft.txt -o draft.fountain
        pbpaste | fountainkit normalize --no-spacing
    """
    handler = CLIHandler(console)
    content = handler.read_input(file)
    result = normalize_screenplay_text(content, enforce_spacing=not no_spacing)
    handler.write_output(result, output)


@cli_command
def spacing_command(
    file: InputFile = None,
    output: OutputFile = None,
) -> None:
    """Enforce Fountain blank-line conventions only."""
    handler = CLIHandler(console)
    content = handler.read_input(file)
    handler.write_output(enforce_fountain_spacing(content), output)


@cli_command
def encoding_command(
    file: InputFile = None,
    output: OutputFile = None,
    check: Annotated[
        bool,
        typer.Option(
            "--check",
            help="Only report whether mojibake is present (exit code 1 if so)",
        ),
    ] = False,
) -> None:
    """Repair UTF-8 text that was decoded as Windows-1252."""
    handler = CLIHandler(console)
    content = handler.read_input(file)

    if check:
        if detect_encoding_issues(content):
            console.print("[yellow]Encoding issues found[/yellow]")
            raise typer.Exit(1)
        console.print("[green]No encoding issues found[/green]")
        return

    handler.write_output(fix_character_encoding(content), output)
