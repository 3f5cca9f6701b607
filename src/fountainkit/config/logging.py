"""structlog over stdlib logging.

Every module logs through a structlog ``BoundLogger``. Events are handed to
stdlib logging wrapped for ``ProcessorFormatter``, so the console handler, the
optional rotating file handler and pytest's ``caplog`` all render the same
event dicts with the renderer chosen by ``log_format``.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import (
    CallsiteParameter,
    CallsiteParameterAdder,
    TimeStamper,
    add_log_level,
    dict_tracebacks,
    format_exc_info,
)
from structlog.stdlib import ProcessorFormatter, add_logger_name, filter_by_level

from fountainkit.config.settings import FountainKitSettings

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_CALLSITE = [
    CallsiteParameter.FILENAME,
    CallsiteParameter.LINENO,
    CallsiteParameter.FUNC_NAME,
]


def _level_for(settings: FountainKitSettings) -> int:
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(
            f"Invalid log level '{settings.log_level}'. "
            "Valid levels are: CRITICAL, DEBUG, ERROR, INFO, WARNING"
        )
    return level


def _renderer(log_format: str) -> Any:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "structured":
        return structlog.processors.KeyValueRenderer(
            key_order=["timestamp", "level", "logger", "event"],
            drop_missing=True,
        )
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.rich_traceback,
    )


def _formatter(settings: FountainKitSettings) -> ProcessorFormatter:
    # Records from third-party stdlib loggers get the same timestamp and level keys
    foreign_pre_chain = [TimeStamper(fmt="iso"), add_log_level, add_logger_name]
    processors: list[Any] = [ProcessorFormatter.remove_processors_meta]
    if settings.log_format != "console":
        processors.extend([format_exc_info, dict_tracebacks])
    processors.append(_renderer(settings.log_format))
    return ProcessorFormatter(processors=processors, foreign_pre_chain=foreign_pre_chain)


def _handlers(settings: FountainKitSettings, level: int) -> list[logging.Handler]:
    formatter = _formatter(settings)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                filename=str(log_path),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
    return handlers


def configure_logging(settings: FountainKitSettings) -> None:
    """Configure stdlib logging and structlog from settings.

    Args:
        settings: Application settings containing logging configuration.

    Raises:
        ValueError: If the log level is not a level the logging module knows.
    """
    level = _level_for(settings)
    logging.basicConfig(level=level, handlers=_handlers(settings, level), force=True)
    logging.getLogger().setLevel(level)

    processors: list[Any] = [
        merge_contextvars,
        filter_by_level,
        add_logger_name,
        add_log_level,
        TimeStamper(fmt="iso"),
    ]
    if settings.debug:
        processors.append(CallsiteParameterAdder(parameters=_CALLSITE))
    processors.append(ProcessorFormatter.wrap_for_formatter)

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)
