"""Configuration display commands."""

from __future__ import annotations

import os
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from fountainkit.cli.formatters import JsonFormatter
from fountainkit.config import FountainKitSettings, get_settings
from fountainkit.config.settings import _get_config_paths

console = Console()

config_app = typer.Typer(
    name="config",
    help="Inspect fountainkit configuration",
    pretty_exceptions_enable=False,
)

# Field name prefix -> section shown in ``config show``
SECTIONS = (
    ("log_", "logging"),
    ("debug", "logging"),
    ("scene_", "matching"),
    ("character_", "matching"),
    ("fuzzy_", "matching"),
    ("duplicate_", "validation"),
    ("retry_", "validation"),
    ("default_scene", "validation"),
)


def section_for(field_name: str) -> str:
    """Section a settings field is listed under."""
    return next(
        (section for prefix, section in SECTIONS if field_name.startswith(prefix)),
        "application",
    )


def _settings_tree(settings: FountainKitSettings) -> Tree:
    sections: dict[str, list[tuple[str, Any]]] = {}
    for field_name in sorted(type(settings).model_fields):
        value = getattr(settings, field_name)
        if value is not None:
            sections.setdefault(section_for(field_name), []).append((field_name, value))

    tree = Tree("[bold cyan]fountainkit configuration[/bold cyan]")
    for section in sorted(sections):
        branch = tree.add(f"[bold]{section}[/bold]")
        for field_name, value in sections[section]:
            branch.add(f"{field_name}: [green]{value}[/green]")
    return tree


def _sources_tree() -> Tree:
    tree = Tree("[bold cyan]Configuration Sources[/bold cyan]")

    files = tree.add("[bold]Configuration Files[/bold]")
    for path in _get_config_paths():
        files.add(f"[green]found[/green] {path}")

    env_vars = tree.add("[bold]Environment Variables[/bold]")
    for key, value in sorted(os.environ.items()):
        if key.startswith("FOUNTAINKIT_"):
            env_vars.add(f"{key} = {escape(value)}")
    return tree


@config_app.command(name="show")
def config_show(
    sources: Annotated[
        bool,
        typer.Option("--sources", "-s", help="Show configuration files and env vars"),
    ] = False,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Display the effective configuration after merging all sources.

    Examples:
        fountainkit config show
        fountainkit config show --sources
    """
    settings = get_settings()
    if json_output:
        JsonFormatter().display(settings)
    elif sources:
        console.print(_sources_tree())
    else:
        console.print(_settings_tree(settings))
