"""Output for Fountain formatting reports and document statistics."""

from __future__ import annotations

from typing import Any

from rich.markup import escape
from rich.table import Table

from fountainkit.cli.formatters.base import OutputFormat, OutputFormatter
from fountainkit.cli.formatters.json_formatter import JsonFormatter
from fountainkit.models import FormatReport
from fountainkit.normalizer import get_issue_summary

_SEVERITY_STYLES = {"error": "red", "warning": "yellow", "info": "blue"}


class FormatFormatter(OutputFormatter[Any]):
    """Formatter for ``FormatReport`` objects and statistics dicts."""

    def format(self, data: Any, format_type: OutputFormat = OutputFormat.TEXT) -> str:
        """Format a report or a statistics mapping."""
        if format_type is OutputFormat.JSON:
            if isinstance(data, FormatReport):
                return JsonFormatter().format(
                    {**data.to_dict(), "summary": get_issue_summary(data.issues)}
                )
            return JsonFormatter().format(data)
        if isinstance(data, FormatReport):
            return self._format_report(data)
        if isinstance(data, dict):
            return "\n".join(f"{key}: {value}" for key, value in data.items())
        return str(data)

    def _format_report(self, report: FormatReport) -> str:
        if report.is_valid:
            return "No formatting issues found"

        table = Table(title="Formatting issues", show_header=True)
        table.add_column("Line", style="dim", justify="right")
        table.add_column("Severity")
        table.add_column("Type", style="cyan")
        table.add_column("Description")
        for issue in report.issues:
            style = _SEVERITY_STYLES.get(issue.severity, "")
            table.add_row(
                str(issue.line_number),
                f"[{style}]{issue.severity}[/{style}]",
                issue.type,
                escape(issue.description),
            )

        counts = get_issue_summary(report.issues)
        summary = ", ".join(f"{kind}: {count}" for kind, count in counts.items() if count)
        return f"{self.render(table)}\n{len(report.issues)} issues ({summary})"
