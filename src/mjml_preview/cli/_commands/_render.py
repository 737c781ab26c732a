# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""The ``render`` command: compile an MJML document to HTML."""

import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from mjml_preview.compiler import ValidationLevel
from mjml_preview.config import Config, find_project_root, safe_load_config
from mjml_preview.exceptions import NotMjmlDocumentError, PropertyParseError, TemplateError
from mjml_preview.pipeline import MJML_EXTENSION, MJML_LANGUAGE_ID, RenderContext, render_document

from ._context import CLIContext
from ._shared import ExitCode, exit_with_error, get_error_console, print_warning


def language_id_for(path: Path) -> str:
    """Language id a host would assign to a file, based on its extension."""
    if path.suffix.lower() == MJML_EXTENSION:
        return MJML_LANGUAGE_ID
    return path.suffix.lstrip(".").lower() or "plaintext"


def document_config(ctx: CLIContext, document: Path) -> tuple[Config, Path | None]:
    """Return the configuration and project root that apply to a document.

    Unless --config or --project-root was given, the project root is looked
    up from the document's directory rather than the working directory.
    """
    if ctx.explicit_config:
        return ctx.config, ctx.project_root or ctx.config.project_root

    project_root = find_project_root(document.parent)
    if project_root == ctx.config.project_root:
        return ctx.config, project_root

    overrides = {"logging": {"level": "debug"}} if ctx.verbose else None
    config, _ = safe_load_config(
        project_root=project_root, start=document.parent, cli_overrides=overrides
    )
    return config, project_root


def render(  # noqa: PLR0913
    file: Path,
    /,
    *,
    output: Annotated[
        Path | None,
        Parameter(name=["--output", "-o"], help="Write HTML to this file instead of stdout"),
    ] = None,
    fix_images: Annotated[
        bool | None,
        Parameter(name="--fix-images", help="Embed local images as data URIs"),
    ] = None,
    minify: Annotated[
        bool | None,
        Parameter(name="--minify", help="Ask the compiler to minify its output"),
    ] = None,
    beautify: Annotated[
        bool | None,
        Parameter(name="--beautify", help="Ask the compiler to beautify its output"),
    ] = None,
    format: Annotated[  # noqa: A002
        bool | None,
        Parameter(name="--format", help="Run the style-safe formatter over the HTML"),
    ] = None,
    validation: Annotated[
        ValidationLevel | None,
        Parameter(name="--validation", help="Compiler validation level (strict, soft, skip)"),
    ] = None,
) -> None:
    """Render an MJML document to HTML

    Template directives are resolved against the document's email-theme.json
    and <name>.sample.json before compiling. Flags override the [render]
    configuration section.

    Args:
        file: The MJML document to render.
        output: Write HTML to this file instead of stdout.
        fix_images: Embed local images as data URIs.
        minify: Ask the compiler to minify its output.
        beautify: Ask the compiler to beautify its output.
        format: Run the style-safe formatter over the HTML.
        validation: Compiler validation level.
    """
    ctx = CLIContext.get_current()
    err_console = get_error_console()
    document = file.resolve()
    config, project_root = document_config(ctx, document)
    settings = config.render

    try:
        text = document.read_text(encoding="utf-8")
    except OSError as e:
        exit_with_error(f"Cannot read {file}: {e}", ExitCode.IO_ERROR, console=err_console)

    context = RenderContext(
        text=text,
        path=document,
        options=config.render_options(),
        project_root=project_root,
        language_id=language_id_for(document),
    )

    def notify(message: str) -> None:
        print_warning(message, console=err_console)

    try:
        result = render_document(
            context,
            fix_images=settings.fix_images if fix_images is None else fix_images,
            minify=minify,
            beautify=beautify,
            format_output=settings.format_output if format is None else format,
            validation=settings.validation_level if validation is None else validation,
            notify=notify,
        )
    except (NotMjmlDocumentError, PropertyParseError, TemplateError) as e:
        exit_with_error(str(e), ExitCode.INPUT_ERROR, console=err_console)

    if not ctx.quiet:
        for error in result.errors:
            print_warning(error.message, console=err_console)

    if result.failed:
        exit_with_error(
            f"Failed to parse file {file.name}",
            ExitCode.COMPILE_ERROR,
            console=err_console,
            label="MJMLError",
        )

    if output is None:
        sys.stdout.write(result.html)
        if not result.html.endswith("\n"):
            sys.stdout.write("\n")
        return

    try:
        output.write_text(result.html, encoding="utf-8")
    except OSError as e:
        exit_with_error(f"Cannot write {output}: {e}", ExitCode.IO_ERROR, console=err_console)
    if not ctx.quiet:
        err_console.print(f"[green]Rendered[/green] {file} -> {output}")
