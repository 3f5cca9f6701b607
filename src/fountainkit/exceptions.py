"""Errors raised at fountainkit's edges: configuration, file IO and parsing.

The text functions themselves never raise on string input. These exceptions
carry a hint and structured details so the CLI can print something a writer
can act on.
"""

from __future__ import annotations

from typing import Any


class FountainKitError(Exception):
    """Base class for all fountainkit errors.

    Attributes:
        message: What went wrong
        hint: How to fix it, if known
        details: Extra key/value context shown under the message
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Render ``Error:``, ``Hint:`` and ``Details:`` lines."""
        lines = [f"Error: {self.message}"]
        if self.hint:
            lines.append(f"Hint: {self.hint}")
        if self.details:
            lines.append("Details:")
            lines.extend(f"  {key}: {value}" for key, value in self.details.items())
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Machine-readable form for ``--json`` output."""
        data: dict[str, Any] = {"error": self.message, "type": type(self).__name__}
        if self.hint:
            data["hint"] = self.hint
        if self.details:
            data["details"] = self.details
        return data


class ConfigurationError(FountainKitError):
    """Invalid settings or an unreadable configuration file."""


class ParseError(FountainKitError):
    """Input that could not be parsed, such as a malformed project file."""


class JSONExtractionError(ParseError):
    """No extraction strategy recovered a JSON object from model output."""

    def __init__(self, raw: str, reason: str) -> None:
        """Keep the raw text and the final decoder complaint.

        Args:
            raw: The text that could not be parsed
            reason: Description of the last parse failure
        """
        self.raw = raw
        self.reason = reason
        super().__init__(
            message=f"JSON parsing failed: {reason}",
            hint="Respond with a single raw JSON object",
            details={"attempted": f"{raw[:200]}..."},
        )


class ValidationError(FountainKitError):
    """A caller passed an argument outside its allowed values."""


class FileSystemError(FountainKitError):
    """A screenplay or project file could not be read or written."""


_MISSPELT_KEYS = {
    "scene_threshold": "scene_match_threshold",
    "character_threshold": "character_match_threshold",
    "max_attempts": "retry_max_attempts",
    "retries": "retry_max_attempts",
}


def check_config_keys(config: dict[str, Any]) -> None:
    """Reject configuration keys that are known misspellings.

    Raises:
        ConfigurationError: Naming the key that should have been used
    """
    for wrong, correct in _MISSPELT_KEYS.items():
        if wrong not in config:
            continue
        raise ConfigurationError(
            message=f"Invalid configuration key '{wrong}'",
            hint=f"Use '{correct}' instead of '{wrong}'",
            details={"invalid_key": wrong, "correct_key": correct},
        )
