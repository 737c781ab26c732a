# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""The ``format`` command: beautify an MJML source document."""

import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from mjml_preview.postprocess import beautify_html

from ._context import CLIContext
from ._render import document_config
from ._shared import ExitCode, exit_with_error, get_error_console, print_warning


def format_document(
    file: Path,
    /,
    *,
    write: Annotated[
        bool,
        Parameter(name=["--write", "-w"], help="Rewrite the file in place"),
    ] = False,
) -> None:
    """Beautify an MJML document, keeping <mj-style> blocks intact

    Args:
        file: The document to format.
        write: Rewrite the file in place instead of printing to stdout.
    """
    ctx = CLIContext.get_current()
    err_console = get_error_console()
    config, _ = document_config(ctx, file.resolve())

    try:
        text = file.read_text(encoding="utf-8")
    except OSError as e:
        exit_with_error(f"Cannot read {file}: {e}", ExitCode.IO_ERROR, console=err_console)

    formatted = beautify_html(
        text,
        config.beautify.to_options(),
        notify=lambda message: print_warning(message, console=err_console),
    )
    if formatted is None:
        raise SystemExit(ExitCode.FORMAT_ERROR)

    if not write:
        sys.stdout.write(formatted)
        return

    if formatted == text:
        if not ctx.quiet:
            err_console.print(f"[dim]Unchanged[/dim] {file}")
        return
    try:
        file.write_text(formatted, encoding="utf-8")
    except OSError as e:
        exit_with_error(f"Cannot write {file}: {e}", ExitCode.IO_ERROR, console=err_console)
    if not ctx.quiet:
        err_console.print(f"[green]Formatted[/green] {file}")
