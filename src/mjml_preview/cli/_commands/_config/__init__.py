# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
"""Config command app for viewing mjml-preview configuration."""

from typing import Annotated

from cyclopts import App, Parameter

from mjml_preview.cli._commands._context import CLIContext, OutputFormat
from mjml_preview.cli._commands._shared import ExitCode, format_json, print_warning

app = App(name="config", help="View mjml-preview configuration", help_on_error=True)


@app.command(name="show")
def _show(
    *,
    format: Annotated[  # noqa: A002
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format (toml, json)"),
    ] = OutputFormat.TOML,
    include_defaults: Annotated[
        bool,
        Parameter(name="--include-defaults", help="Include default values"),
    ] = False,
) -> None:
    """Display merged configuration

    Shows the configuration merged from defaults, the user config file, the
    project's mjml-preview.toml, MJML_PREVIEW_* environment variables and
    command-line options.

    Args:
        format: Output format (toml, json).
        include_defaults: Include values that equal the defaults.
    """
    ctx = CLIContext.get_current()
    if ctx.config_error:
        print_warning(ctx.config_error)

    data = ctx.config.to_dict(include_defaults=include_defaults)
    match format:
        case OutputFormat.JSON:
            output = format_json(data)
        case _:
            output = ctx.config.to_toml(include_defaults=include_defaults)

    print(output.rstrip())  # noqa: T201
    raise SystemExit(ExitCode.SUCCESS)
