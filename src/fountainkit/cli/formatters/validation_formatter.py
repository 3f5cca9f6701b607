"""Output for validated model responses."""

from __future__ import annotations

from fountainkit.ai.json_validator import ValidationResult
from fountainkit.cli.formatters.base import OutputFormat, OutputFormatter
from fountainkit.cli.formatters.json_formatter import JsonFormatter


class ValidationFormatter(OutputFormatter[ValidationResult]):
    """Renders accepted content as-is and rejections as an error list."""

    def format(
        self, data: ValidationResult, format_type: OutputFormat = OutputFormat.TEXT
    ) -> str:
        """Format a validation result."""
        if format_type is OutputFormat.JSON:
            return JsonFormatter().format(data)
        if data.valid:
            return data.content
        lines = [f"Response rejected ({len(data.errors)} errors)"]
        lines.extend(f"  - {error}" for error in data.errors)
        return "\n".join(lines)
