"""Shared CLI utilities for commands."""

from enum import IntEnum
from typing import Any, Never

import orjson
from rich.console import Console
from rich.markup import escape

FormattableData = dict[str, Any]  # pyright: ignore[reportExplicitAny]


class ExitCode(IntEnum):
    """Exit codes for mjml-preview CLI commands."""

    SUCCESS = 0
    COMPILE_ERROR = 1
    INPUT_ERROR = 2
    FORMAT_ERROR = 3
    IO_ERROR = 4


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Format data as JSON."""
    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr."""
    return Console(stderr=True)


def print_warning(message: str, *, console: Console | None = None) -> None:
    (console or get_error_console()).print(f"[yellow]Warning:[/yellow] {escape(message)}")


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INPUT_ERROR,
    *,
    console: Console | None = None,
    label: str = "Error",
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use.
        console: Optional Rich console for output. Defaults to stderr.
        label: Prefix shown before the message.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    (console or get_error_console()).print(f"[red]{label}:[/red] {escape(message)}")
    raise SystemExit(code)
