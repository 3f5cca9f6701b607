"""Settings for fountainkit.

Values come from, in increasing order of precedence: field defaults, a
``.env`` file, ``FOUNTAINKIT_*`` environment variables, configuration files
(YAML, TOML or JSON, later files winning) and finally command line flags.
``fountainkit config show --sources`` lists what was picked up.
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fountainkit.exceptions import ConfigurationError, check_config_keys

CONFIG_FILE_STEM = "fountainkit"


def _read_yaml(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f)


def _read_toml(path: Path) -> Any:
    with path.open("rb") as f:
        return tomllib.load(f)


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


_READERS: dict[str, Callable[[Path], Any]] = {
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
    ".toml": _read_toml,
    ".json": _read_json,
}


class FountainKitSettings(BaseSettings):
    """Tunable thresholds and logging options.

    Example:
        export FOUNTAINKIT_SCENE_MATCH_THRESHOLD=0.9
        fountainkit --config fountainkit.yaml tags sync -p project.json draft.fountain
    """

    model_config = SettingsConfigDict(
        env_prefix="FOUNTAINKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(console|json|structured)$",
    )
    log_file: Path | None = Field(default=None, description="Optional log file path")

    scene_match_threshold: float = Field(
        default=0.85,
        description="Similarity a fuzzy scene heading match must exceed",
        ge=0.0,
        le=1.0,
    )
    character_match_threshold: float = Field(
        default=0.80,
        description="Similarity a fuzzy character name match must exceed",
        ge=0.0,
        le=1.0,
    )
    fuzzy_max_length: int = Field(
        default=500,
        description="Strings are truncated to this length before fuzzy comparison",
        ge=1,
    )

    duplicate_min_length: int = Field(
        default=20,
        description="Minimum line length considered by duplicate detection",
        ge=1,
    )
    retry_max_attempts: int = Field(
        default=3,
        description="Generation attempts before giving up on invalid JSON",
        ge=1,
        le=10,
    )
    default_scene_count: int = Field(
        default=3,
        description="Scenes per director multiple-scene generation",
        ge=1,
        le=3,
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand ``~`` and environment variables, then resolve."""
        if v is None:
            return None
        if isinstance(v, str):
            v = Path(os.path.expandvars(v)).expanduser()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(f"log_file must be a str or Path, got {type(v).__name__}")

    @field_validator("log_level", "log_format", mode="before")
    @classmethod
    def normalize_case(cls, v: Any, info: ValidationInfo) -> str:
        """Accept any case: levels are stored upper, formats lower."""
        if not isinstance(v, str):
            raise ValueError(f"{info.field_name} must be a string, got {type(v).__name__}")
        return v.upper() if info.field_name == "log_level" else v.lower()

    @classmethod
    def from_env(cls) -> FountainKitSettings:
        """Create settings from the environment and ``.env`` only."""
        return cls()

    @classmethod
    def read_config_file(cls, config_path: Path | str) -> dict[str, Any]:
        """Read the raw key/value mapping stored in a configuration file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigurationError: If the format is unsupported, the content is
                not a mapping, or a key is a known misspelling.
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        reader = _READERS.get(path.suffix.lower())
        if reader is None:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {path.suffix}",
                hint="Use a .yaml, .yml, .toml or .json file",
                details={"file": str(path), "supported_formats": sorted(_READERS)},
            )

        data = reader(path) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                message=f"Configuration file must contain a mapping: {path}",
                details={"found": type(data).__name__},
            )
        check_config_keys(data)
        return data

    @classmethod
    def from_file(cls, config_path: Path | str) -> FountainKitSettings:
        """Load settings from one YAML, TOML or JSON file."""
        return cls(**cls.read_config_file(config_path))

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: Iterable[Path | str] | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> FountainKitSettings:
        """Merge config files (later wins) and CLI arguments over the environment.

        Missing files are skipped with a warning; ``None`` CLI values are
        ignored so unset flags never mask a file value.
        """
        merged: dict[str, Any] = {}
        for config_file in config_files or ():
            try:
                merged.update(cls.read_config_file(config_file))
            except FileNotFoundError:
                from fountainkit.config.logging import get_logger

                get_logger(__name__).warning(
                    "Configuration file not found, skipping",
                    config_file=str(config_file),
                )

        merged.update({k: v for k, v in (cli_args or {}).items() if v is not None})
        return cls(**merged)


_settings: FountainKitSettings | None = None
_discovered_files: list[Path] | None = None


def _candidate_config_files() -> list[Path]:
    directories = (Path.home() / ".config" / CONFIG_FILE_STEM, Path.cwd())
    names = ("config", CONFIG_FILE_STEM)
    candidates = []
    for directory, name in zip(directories, names, strict=True):
        for suffix in (".yaml", ".json", ".toml"):
            candidates.append(directory / f"{name}{suffix}")
    return candidates


def _get_config_paths() -> list[Path]:
    """Existing user and project config files, in increasing precedence."""
    global _discovered_files
    if _discovered_files is None:
        found = []
        for path in _candidate_config_files():
            try:
                if path.is_file():
                    found.append(path)
            except OSError:
                continue
        _discovered_files = found
    return _discovered_files


def get_settings() -> FountainKitSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        _settings = (
            FountainKitSettings.from_multiple_sources(config_files=config_paths)
            if config_paths
            else FountainKitSettings.from_env()
        )
    return _settings


def set_settings(settings: FountainKitSettings) -> None:
    """Replace the process-wide settings."""
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Forget loaded settings and discovered config files."""
    global _settings, _discovered_files
    _settings = None
    _discovered_files = None


def reset_settings() -> None:
    """Reset the global settings instance."""
    clear_settings_cache()


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> FountainKitSettings:
    """Resolve settings for a CLI invocation.

    An explicit ``--config`` file replaces config file discovery; otherwise
    the global settings are used. Non-``None`` overrides win either way.

    Raises:
        FileNotFoundError: If ``config_file`` is given but does not exist.
    """
    if config_file is not None:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        return FountainKitSettings.from_multiple_sources(
            config_files=[config_file], cli_args=cli_overrides
        )

    settings = get_settings()
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    if not overrides:
        return settings
    return FountainKitSettings(**{**settings.model_dump(), **overrides})
