"""fountainkit command line entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from fountainkit import __version__
from fountainkit.cli.commands import (
    check_command,
    config_app,
    encoding_command,
    fix_command,
    heading_app,
    normalize_command,
    spacing_command,
    stats_command,
    tags_app,
    validate_command,
)
from fountainkit.cli.formatters import JsonFormatter
from fountainkit.cli.utils.cli_handler import CLIHandler
from fountainkit.config import (
    configure_logging,
    get_logger,
    get_settings_for_cli,
    set_settings,
)

logger = get_logger(__name__)
console = Console()

DESCRIPTION = "Normalize, tag and validate Fountain screenplays"

app = typer.Typer(
    name="fountainkit",
    help=DESCRIPTION,
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="normalize")(normalize_command)
app.command(name="spacing")(spacing_command)
app.command(name="encoding")(encoding_command)
app.command(name="validate")(validate_command)
app.command(name="check")(check_command)
app.command(name="fix")(fix_command)
app.command(name="stats")(stats_command)

app.add_typer(heading_app, name="heading")
app.add_typer(tags_app, name="tags")
app.add_typer(config_app, name="config")


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show fountainkit version."""
    if json_output:
        JsonFormatter().display(
            {"name": "fountainkit", "version": __version__, "description": DESCRIPTION}
        )
        return
    console.print(f"fountainkit v{__version__}", highlight=False)


def _log_overrides(verbose: bool, debug: bool) -> dict[str, Any]:
    if debug:
        return {"log_level": "DEBUG", "debug": True}
    if verbose:
        return {"log_level": "INFO"}
    return {}


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML, or JSON)",
            envvar="FOUNTAINKIT_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging", envvar="FOUNTAINKIT_DEBUG"),
    ] = False,
) -> None:
    """Apply --config, --verbose and --debug before any command runs."""
    overrides = _log_overrides(verbose, debug)
    if config is None and not overrides:
        return

    try:
        settings = get_settings_for_cli(config_file=config, cli_overrides=overrides)
    except Exception as e:
        CLIHandler(Console(stderr=True)).handle_error(e)
        return

    set_settings(settings)
    configure_logging(settings)
    logger.debug(
        "Settings applied",
        config_file=str(config) if config else None,
        log_level=settings.log_level,
    )


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
