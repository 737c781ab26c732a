"""Logging utilities for mjml-preview.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs. Each logger is self-contained and
does not modify global structlog configuration.

Library code logs through `get_logger()`, which returns the logger installed
for the current context by `use_logger()` (the CLI installs its file logger
there) or a stderr logger that only emits warnings and errors.
"""

import contextvars
import logging
import sys
from functools import cache
from logging.handlers import RotatingFileHandler
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

from ._paths import get_cli_log_file

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]

_current_logger: "contextvars.ContextVar[FilteringBoundLogger | None]" = (
    contextvars.ContextVar("mjml_preview_logger", default=None)
)


def _get_log_level(default: str = "info") -> int:
    """Get the log level from environment variables.

    Checks MJML_PREVIEW_DEBUG first (sets DEBUG if present), then
    MJML_PREVIEW_LOG_LEVEL, then falls back to `default`.

    Returns:
        The logging level as an integer.
    """
    if getenv("MJML_PREVIEW_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    level = getenv("MJML_PREVIEW_LOG_LEVEL", default).upper()
    return log_levels.get(level, logging.INFO)


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, MJML_PREVIEW_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("MJML_PREVIEW_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _processors(log_format: LogFormatType) -> list[structlog.typing.Processor]:
    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def _create_logger(
    log_file_path: str,
    *,
    log_level: int | None = None,
    log_format: LogFormatType = "json",
    max_bytes: int | None = None,
    backup_count: int | None = None,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger writing to the specified file.

    Args:
        log_file_path: Path to the log file (will be opened in append mode).
        log_level: Override log level (uses env vars if not specified).
        log_format: Output format, either "json" or "text".
        max_bytes: Maximum size in bytes before rotation. Must be set with
            backup_count for rotation to be enabled.
        backup_count: Number of rotated log files to keep. Must be set with
            max_bytes for rotation to be enabled.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    log_path = Path(log_file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    effective_level = log_level if log_level is not None else _get_log_level()

    raw_logger: object
    if max_bytes is not None and backup_count is not None:
        stdlib_logger = logging.getLogger(f"mjml_preview.{log_path.stem}.{id(log_path)}")
        stdlib_logger.handlers.clear()
        stdlib_logger.propagate = False
        stdlib_logger.setLevel(effective_level)

        handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        handler.setLevel(effective_level)
        handler.setFormatter(logging.Formatter("%(message)s"))
        stdlib_logger.addHandler(handler)
        raw_logger = stdlib_logger
    else:
        raw_logger = structlog.WriteLoggerFactory(file=log_path.open("a"))()

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            raw_logger,
            processors=_processors(log_format),
            wrapper_class=structlog.make_filtering_bound_logger(effective_level),
            context_class=dict,
        ),
    )


@cache
def _default_logger() -> "FilteringBoundLogger":  # noqa: UP037
    """Create the fallback logger used outside the CLI.

    Writes text-formatted entries to stderr so that rendered HTML on stdout
    is never interleaved with log output.
    """
    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.PrintLogger(file=sys.stderr),
            processors=_processors("text"),
            wrapper_class=structlog.make_filtering_bound_logger(
                _get_log_level(default="warning")
            ),
            context_class=dict,
        ),
    )


def get_logger(**initial_values: object) -> "FilteringBoundLogger":  # noqa: UP037
    """Return the logger for the current context.

    Args:
        initial_values: Key-value pairs bound to the returned logger.

    Returns:
        The installed context logger, or the stderr fallback logger.
    """
    logger = _current_logger.get() or _default_logger()
    if initial_values:
        return logger.bind(**initial_values)
    return logger


def use_logger(
    logger: "FilteringBoundLogger | None",  # noqa: UP037
) -> contextvars.Token["FilteringBoundLogger | None"]:  # noqa: UP037
    """Install a logger for the current context.

    Args:
        logger: The logger to install, or None to restore the fallback.

    Returns:
        A token that can be passed to `reset_logger()`.
    """
    return _current_logger.set(logger)


def reset_logger(
    token: contextvars.Token["FilteringBoundLogger | None"],  # noqa: UP037
) -> None:
    """Restore the logger that was active before `use_logger()`."""
    _current_logger.reset(token)


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
    max_bytes: int = 0,
    backup_count: int = 0,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for CLI commands.

    Creates a standalone structlog logger that writes structured logs
    to either a specified file or the default CLI log file in the user
    log directory.

    The log level can be overridden by environment variables:
    - MJML_PREVIEW_DEBUG: If set, enables DEBUG level logging regardless of config

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (uses the default CLI log file if empty).
        command: Name of the CLI command for context (bound to all entries).
        max_bytes: Rotate the log file at this size. 0 disables rotation.
        backup_count: Rotated files to keep. 0 disables rotation.

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    effective_file = log_file if log_file else str(get_cli_log_file())
    effective_level = _log_level_from_string(level, respect_env=True)

    logger = _create_logger(
        effective_file,
        log_level=effective_level,
        log_format=log_format,
        max_bytes=max_bytes or None,
        backup_count=backup_count or None,
    )

    if command:
        return logger.bind(command=command)
    return logger
