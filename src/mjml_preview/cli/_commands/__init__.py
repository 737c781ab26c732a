"""mjml-preview CLI commands."""
# pyright: reportUnusedCallResult=false

from cyclopts import App

from ._config import app as config_app
from ._context import CLIContext, OutputFormat
from ._format import format_document
from ._render import render
from ._shared import ExitCode, exit_with_error, format_json, get_error_console

__all__ = [
    "CLIContext",
    "ExitCode",
    "OutputFormat",
    "config_app",
    "exit_with_error",
    "format_document",
    "format_json",
    "get_error_console",
    "register_commands",
    "render",
]


def register_commands(app: App) -> None:
    app.command(render, name="render")
    app.command(format_document, name="format")
    app.command(config_app)
