"""Scene heading commands."""

from __future__ import annotations

from typing import Annotated

import typer

from fountainkit.cli.formatters import OutputFormat, SceneFormatter
from fountainkit.cli.utils.cli_handler import cli_command
from fountainkit.models import SceneHeadingParts
from fountainkit.parser.scene_heading import (
    build_scene_heading,
    detect_scene_heading_field,
    parse_scene_heading,
)

heading_app = typer.Typer(
    name="heading",
    help="Parse and build scene headings",
    pretty_exceptions_enable=False,
    add_completion=False,
)


@heading_app.command(name="parse")
@cli_command
def parse_heading(
    text: Annotated[str, typer.Argument(help="Scene heading line")],
    cursor: Annotated[
        int | None,
        typer.Option("--cursor", help="Cursor offset; reports the field under it"),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Split a heading into type, location and time of day.

    Examples:
        fountainkit heading parse "INT. KITCHEN - NIGHT"
        fountainkit heading parse "EXT. PARK - DAY" --cursor 8 --json
    """
    result = (
        parse_scene_heading(text)
        if cursor is None
        else detect_scene_heading_field(text, cursor)
    )
    SceneFormatter().display(result, OutputFormat.from_flag(json_output))


@heading_app.command(name="build")
@cli_command
def build_heading(
    type_: Annotated[
        str, typer.Option("--type", "-t", help="INT, EXT, INT/EXT, I/E or EST")
    ] = "",
    location: Annotated[str, typer.Option("--location", "-l", help="Location")] = "",
    time: Annotated[str, typer.Option("--time", help="Time of day")] = "",
) -> None:
    """Assemble a heading line from its parts.

    Examples:
        fountainkit heading build --type int --location kitchen --time night
    """
    parts = SceneHeadingParts(type=type_, location=location, time=time)
    typer.echo(build_scene_heading(parts))
