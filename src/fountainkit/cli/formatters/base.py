"""Formatter interface shared by the CLI commands."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, TypeVar

from rich.console import Console, RenderableType

T = TypeVar("T")


class OutputFormat(str, Enum):
    """How a command prints its result."""

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_flag(cls, json_output: bool) -> OutputFormat:
        """Map a ``--json`` flag to a format."""
        return cls.JSON if json_output else cls.TEXT


class OutputFormatter(ABC, Generic[T]):
    """Turns a command result into text for people or JSON for scripts."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    @abstractmethod
    def format(self, data: T, format_type: OutputFormat = OutputFormat.TEXT) -> str:
        """Format data for output."""

    def render(self, renderable: RenderableType) -> str:
        """Render a rich table or tree to a string at the console's width."""
        with self.console.capture() as capture:
            self.console.print(renderable)
        return capture.get().rstrip("\n")

    def display(self, data: T, format_type: OutputFormat = OutputFormat.TEXT) -> None:
        """Format ``data`` and write it to stdout."""
        print(self.format(data, format_type))
