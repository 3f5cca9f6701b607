"""Error reporting and file or stdin IO shared by every command."""

from __future__ import annotations

import sys
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from fountainkit.cli.formatters.json_formatter import JsonFormatter
from fountainkit.config import get_logger
from fountainkit.exceptions import FileSystemError, FountainKitError

logger = get_logger(__name__)


class CLIHandler:
    """Reads command input, writes command output and reports failures.

    Status messages and errors go to ``console``; document text always goes
    to stdout so commands can be piped.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Display an error consistently and exit.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use
        """
        logger.debug("Command failed", error=str(error), exc_info=error)

        if json_output:
            print(self.json_formatter.format_error_response(error, exit_code))
        elif isinstance(error, FountainKitError):
            self.console.print(f"[red]{escape(error.format_error())}[/red]")
        else:
            self.console.print(f"[red]Error: {escape(str(error))}[/red]")

        raise typer.Exit(exit_code)

    def read_input(self, path: Path | None) -> str:
        """Read text from ``path``, or from stdin when no path is given.

        Raises:
            FileSystemError: If the file is missing or unreadable, or no
                input is available
        """
        if path is None:
            if sys.stdin.isatty():
                raise FileSystemError(
                    message="No input provided",
                    hint="Pass a file path or pipe text on stdin",
                )
            return sys.stdin.read()

        if not path.exists():
            raise FileSystemError(
                message=f"File not found: {path}",
                hint="Check the path and try again",
            )
        if not path.is_file():
            raise FileSystemError(message=f"Not a file: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileSystemError(
                message=f"Could not read {path}",
                hint="Input files must be UTF-8 text",
                details={"reason": str(e)},
            ) from e

    def write_output(self, text: str, output: Path | None) -> None:
        """Write ``text`` to ``output``, or to stdout when no path is given."""
        if output is None:
            typer.echo(text)
            return
        try:
            output.write_text(text if text.endswith("\n") else f"{text}\n", encoding="utf-8")
        except OSError as e:
            raise FileSystemError(
                message=f"Could not write {output}",
                details={"reason": str(e)},
            ) from e
        logger.info("Wrote output", path=str(output), characters=len(text))
        self.console.print(f"[green]Wrote[/green] {output}", highlight=False)


def cli_command(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator for CLI commands with standardized error handling."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except Exception as e:
            CLIHandler().handle_error(e, kwargs.get("json_output", False))

    return wrapper
