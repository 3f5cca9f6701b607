"""AI response validation command."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from fountainkit.ai import (
    ValidationResult,
    validate_dialogue_content,
    validate_director_content,
    validate_director_modal_content,
    validate_rewrite_content,
    validate_screenplay_content,
)
from fountainkit.cli.formatters import OutputFormat, ValidationFormatter
from fountainkit.cli.utils.cli_handler import CLIHandler, cli_command

console = Console(stderr=True)


class ResponseKind(str, Enum):
    """Envelopes the validate command understands."""

    SCREENPLAY = "screenplay"
    DIRECTOR = "director"
    SCENES = "scenes"
    REWRITE = "rewrite"
    DIALOGUE = "dialogue"


class GenerationLength(str, Enum):
    """Director generation lengths."""

    SHORT = "short"
    FULL = "full"
    MULTIPLE = "multiple"


@cli_command
def validate_command(
    kind: Annotated[ResponseKind, typer.Argument(help="Response envelope to expect")],
    file: Annotated[
        Path | None,
        typer.Argument(help="File holding the raw model output (stdin when omitted)"),
    ] = None,
    context: Annotated[
        Path | None,
        typer.Option("--context", help="Script text before the cursor, for duplicates"),
    ] = None,
    length: Annotated[
        GenerationLength,
        typer.Option("--length", help="Director generation length"),
    ] = GenerationLength.FULL,
    scene_count: Annotated[
        int | None,
        typer.Option("--scene-count", help="Scenes expected (1-3)"),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Check raw model output against a screenplay JSON envelope.

    Prints the rendered Fountain text when valid, the errors otherwise.
    Exit code 1 means the response was rejected.

    Examples:
        fountainkit validate screenplay response.txt --context script.fountain
        fountainkit validate scenes response.txt --scene-count 2 --json
    """
    handler = CLIHandler(console)
    raw = handler.read_input(file)
    context_text = handler.read_input(context) if context else None

    result: ValidationResult
    if kind is ResponseKind.SCREENPLAY:
        result = validate_screenplay_content(raw, context_text)
    elif kind is ResponseKind.DIRECTOR:
        result = validate_director_content(
            raw, context_text, generation_length=length.value, scene_count=scene_count
        )
    elif kind is ResponseKind.SCENES:
        result = validate_director_modal_content(
            raw, context_text, expected_scene_count=scene_count or 1
        )
    elif kind is ResponseKind.REWRITE:
        result = validate_rewrite_content(raw)
    else:
        result = validate_dialogue_content(raw, context_text)

    formatter = ValidationFormatter()
    output_format = OutputFormat.from_flag(json_output)
    if result.valid or output_format is OutputFormat.JSON:
        formatter.display(result, output_format)
    else:
        console.print(
            formatter.format(result),
            style="red",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

    if not result.valid:
        raise typer.Exit(1)
