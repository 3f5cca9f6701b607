"""Output formatters for the CLI."""

from fountainkit.cli.formatters.base import OutputFormat, OutputFormatter
from fountainkit.cli.formatters.format_formatter import FormatFormatter
from fountainkit.cli.formatters.json_formatter import JsonFormatter
from fountainkit.cli.formatters.scene_formatter import SceneFormatter
from fountainkit.cli.formatters.validation_formatter import ValidationFormatter

__all__ = [
    "FormatFormatter",
    "JsonFormatter",
    "OutputFormat",
    "OutputFormatter",
    "SceneFormatter",
    "ValidationFormatter",
]
