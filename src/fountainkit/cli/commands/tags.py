"""Scene directive commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console

from fountainkit.cli.formatters import OutputFormat, SceneFormatter
from fountainkit.cli.utils.cli_handler import CLIHandler, cli_command
from fountainkit.config import get_logger
from fountainkit.exceptions import ParseError
from fountainkit.models import CharacterRef, LocationRef, SceneRef, ScreenplayProject
from fountainkit.tags import extract_tags, inject_tags, remove_tags, update_script_tags

logger = get_logger(__name__)
console = Console(stderr=True)

tags_app = typer.Typer(
    name="tags",
    help="Read and write @location/@characters scene directives",
    pretty_exceptions_enable=False,
    add_completion=False,
)

InputFile = Annotated[
    Path | None,
    typer.Argument(help="Fountain file to read (reads stdin when omitted)"),
]
OutputFile = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write the result here instead of stdout"),
]


@tags_app.command(name="extract")
@cli_command
def extract(
    file: InputFile = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List every scene with the directives attached to it."""
    scenes = extract_tags(CLIHandler(console).read_input(file))
    SceneFormatter().display(scenes, OutputFormat.from_flag(json_output))


@tags_app.command(name="strip")
@cli_command
def strip(file: InputFile = None, output: OutputFile = None) -> None:
    """Remove all directive lines, leaving clean Fountain."""
    handler = CLIHandler(console)
    handler.write_output(remove_tags(handler.read_input(file)), output)


@tags_app.command(name="inject")
@cli_command
def inject(
    heading: Annotated[
        str, typer.Option("--heading", help="Exact scene heading to tag")
    ],
    file: InputFile = None,
    characters: Annotated[
        list[str] | None,
        typer.Option("--character", "-c", help="Character id (repeatable)"),
    ] = None,
    location: Annotated[
        str | None, typer.Option("--location", "-l", help="Location id")
    ] = None,
    scene_id: Annotated[
        str, typer.Option("--scene-id", help="Scene id for logging")
    ] = "",
    output: OutputFile = None,
) -> None:
    """Write directives under one scene heading, replacing old ones.

    Examples:
        fountainkit tags inject script.fountain --heading "INT. KITCHEN - DAY" \\
            -c sarah -c john -l kitchen
    """
    handler = CLIHandler(console)
    content = handler.read_input(file)
    scene = SceneRef(id=scene_id or heading, heading=heading)
    character_refs = [CharacterRef(id=char_id, name=char_id) for char_id in characters or []]
    location_ref = LocationRef(id=location, name=location) if location else None
    handler.write_output(inject_tags(content, scene, character_refs, location_ref), output)


def _load_project(path: Path, handler: CLIHandler) -> ScreenplayProject:
    raw = handler.read_input(path)
    try:
        return ScreenplayProject.model_validate(json.loads(raw))
    except json.JSONDecodeError as e:
        raise ParseError(
            message=f"Project file is not valid JSON: {path}",
            details={"reason": str(e)},
        ) from e
    except PydanticValidationError as e:
        raise ParseError(
            message=f"Project file has an unexpected shape: {path}",
            hint="Expected scenes, characters, locations and relationships keys",
            details={"errors": e.error_count()},
        ) from e


@tags_app.command(name="sync")
@cli_command
def sync(
    project: Annotated[
        Path,
        typer.Option(
            "--project",
            "-p",
            help="JSON file with scenes, characters, locations and relationships",
        ),
    ],
    file: InputFile = None,
    output: OutputFile = None,
) -> None:
    """Re-inject directives for every scene from stored relationships."""
    handler = CLIHandler(console)
    content = handler.read_input(file)
    data = _load_project(project, handler)
    logger.debug(
        "Synchronising scene directives",
        scenes=len(data.scenes),
        relationships=len(data.relationships.scenes),
    )
    updated = update_script_tags(
        content, data.scenes, data.characters, data.locations, data.relationships
    )
    handler.write_output(updated, output)
