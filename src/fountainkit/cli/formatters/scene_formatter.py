"""Text and JSON output for scene headings and scene directives."""

from __future__ import annotations

from typing import Any

from rich.markup import escape
from rich.table import Table

from fountainkit.cli.formatters.base import OutputFormat, OutputFormatter
from fountainkit.cli.formatters.json_formatter import JsonFormatter
from fountainkit.models import SceneHeadingFieldInfo, SceneHeadingParts, SceneTags


class SceneFormatter(OutputFormatter[Any]):
    """Formatter for heading parts, cursor fields and extracted scene tags."""

    def format(self, data: Any, format_type: OutputFormat = OutputFormat.TEXT) -> str:
        """Format scene data for output.

        Args:
            data: ``SceneHeadingParts``, ``SceneHeadingFieldInfo`` or a list
                of ``SceneTags``
            format_type: Output format type

        Returns:
            Formatted string
        """
        if format_type is OutputFormat.JSON:
            return JsonFormatter().format(data)
        if isinstance(data, SceneHeadingFieldInfo):
            return self._format_field_info(data)
        if isinstance(data, SceneHeadingParts):
            return self.render(self._parts_table(data))
        if isinstance(data, list):
            return self._format_scene_tags(data)
        return str(data)

    def _format_field_info(self, info: SceneHeadingFieldInfo) -> str:
        summary = (
            f"Field: {info.field} "
            f"({info.field_start}-{info.field_end}, offset {info.cursor_in_field})"
        )
        return f"{summary}\n{self.render(self._parts_table(info.parts))}"

    def _parts_table(self, parts: SceneHeadingParts) -> Table:
        table = Table(show_header=True)
        table.add_column("Part", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("type", escape(parts.type))
        table.add_row("location", escape(parts.location))
        table.add_row("time", escape(parts.time))
        return table

    def _format_scene_tags(self, scenes: list[SceneTags]) -> str:
        if not scenes:
            return "No scene headings found"

        table = Table(title="Scenes", show_header=True)
        table.add_column("Lines", style="dim")
        table.add_column("Heading", style="cyan")
        table.add_column("Location", style="green")
        table.add_column("Characters", style="magenta")
        for scene in scenes:
            table.add_row(
                f"{scene.start_line}-{scene.end_line}",
                escape(scene.scene_heading),
                escape(scene.location or ""),
                escape(", ".join(scene.characters)),
            )
        return self.render(table)
