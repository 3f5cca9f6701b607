"""CLI command implementations."""

from fountainkit.cli.commands.check import check_command, fix_command, stats_command
from fountainkit.cli.commands.config import config_app
from fountainkit.cli.commands.heading import heading_app
from fountainkit.cli.commands.normalize import (
    encoding_command,
    normalize_command,
    spacing_command,
)
from fountainkit.cli.commands.tags import tags_app
from fountainkit.cli.commands.validate import validate_command

__all__ = [
    "check_command",
    "config_app",
    "encoding_command",
    "fix_command",
    "heading_app",
    "normalize_command",
    "spacing_command",
    "stats_command",
    "tags_app",
    "validate_command",
]
