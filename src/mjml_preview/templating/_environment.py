"""Jinja2 Environment factory."""

from dataclasses import dataclass

from jinja2 import ChainableUndefined, Environment

from ._values import to_output


@dataclass(slots=True, frozen=True)
class EnvironmentConfig:
    """Configuration for the Jinja2 Environment that renders templates.

    Attributes:
        autoescape: Escape interpolated values (default: True, as the output is
            markup).
        keep_trailing_newline: Preserve trailing newline in templates.
    """

    autoescape: bool = True
    keep_trailing_newline: bool = True


def create_environment(*, config: EnvironmentConfig | None = None) -> Environment:
    """Create a Jinja2 Environment configured for translated Handlebars templates.

    Missing values chain silently (``a.b.c`` on an empty property set renders as
    the empty string) and every output value is converted to the string
    JavaScript would produce before escaping.

    Args:
        config: Optional environment configuration. If None, uses defaults.

    Returns:
        Configured Jinja2 Environment.

    Example:
        from mjml_preview.templating import create_environment

        env = create_environment()
        template = env.from_string("{{ name }}")
        result = template.render(name="World")
    """
    if config is None:
        config = EnvironmentConfig()

    return Environment(
        autoescape=config.autoescape,
        keep_trailing_newline=config.keep_trailing_newline,
        undefined=ChainableUndefined,
        finalize=to_output,
    )
