"""JSON output formatter for CLI."""

from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any

from fountainkit.cli.formatters.base import OutputFormat, OutputFormatter


def to_jsonable(data: Any) -> Any:
    """Convert models, dataclasses and enums into plain JSON values."""
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return dataclasses.asdict(data)
    if isinstance(data, Enum):
        return data.value
    if isinstance(data, list | tuple):
        return [to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: to_jsonable(value) for key, value in data.items()}
    return data


class JsonFormatter(OutputFormatter[Any]):
    """Generic JSON formatter for CLI output."""

    def format(self, data: Any, format_type: OutputFormat = OutputFormat.JSON) -> str:  # noqa: ARG002
        """Format data as indented JSON; bare primitives become ``{"value": ...}``."""
        converted = to_jsonable(data)
        if not isinstance(converted, dict | list):
            converted = {"value": converted}
        return json.dumps(converted, default=str, indent=2, ensure_ascii=False)

    def format_success(self, message: str, data: Any = None) -> str:
        """Format a success response."""
        response: dict[str, Any] = {"success": True, "message": message}
        if data is not None:
            response["data"] = to_jsonable(data)
        return json.dumps(response, default=str, indent=2, ensure_ascii=False)

    def format_error_response(self, error: str | Exception, code: int = 1) -> str:
        """Format an error as ``{"success": false, "error": ..., "code": ...}``.

        fountainkit errors contribute their hint and details as well.
        """
        body = error.to_dict() if hasattr(error, "to_dict") else {"error": str(error)}
        response = {"success": False, **body, "code": code}
        return json.dumps(response, default=str, indent=2)
