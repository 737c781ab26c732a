# pyright: reportAny=false, reportExplicitAny=false, reportUnknownArgumentType=false, reportUnknownVariableType=false
"""Configuration validation using Pydantic schemas.

Validation uses the frozen Pydantic models from _models/. Unknown keys are
ignored so that newer config files still load.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from mjml_preview.config._models._logging import LoggingConfig
from mjml_preview.config._models._render import BeautifyConfig, RenderConfig
from mjml_preview.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Represents a configuration validation issue.

    Attributes:
        key: Dotted path to the configuration key (e.g., "render.fix_images").
        message: Human-readable description of the issue.
        expected: Description of expected value or type, if available.
        actual: The actual value that caused the issue.
        source: Name of the ConfigSource where the issue was found, or None.
    """

    key: str
    message: str
    expected: str | None
    actual: Any
    source: str | None


class ConfigSchema(BaseModel):
    """Pydantic schema for the merged configuration."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    render: RenderConfig = RenderConfig()
    beautify: BeautifyConfig = BeautifyConfig()
    logging: LoggingConfig = LoggingConfig()


def _pydantic_error_to_issue(
    error: "ErrorDetails",
    source: str | None,
) -> ValidationIssue:
    loc = error.get("loc", ())
    key = ".".join(str(part) for part in loc)
    message = str(error.get("msg", "Validation error"))

    ctx = error.get("ctx")
    expected: str | None = None
    if ctx is not None:
        if "expected" in ctx:
            expected = str(ctx["expected"])
        elif "pattern" in ctx:
            expected = f"pattern: {ctx['pattern']}"
        elif "ge" in ctx:
            expected = f">= {ctx['ge']}"

    return ValidationIssue(
        key=key,
        message=message,
        expected=expected,
        actual=error.get("input"),
        source=source,
    )


def validate_config(config: dict[str, Any]) -> list[ValidationIssue]:
    """Validate a merged configuration dictionary.

    Args:
        config: The merged configuration dictionary to validate.

    Returns:
        List of ValidationIssue objects. Empty list indicates valid config.
    """
    try:
        _ = ConfigSchema.model_validate(config)
    except ValidationError as e:
        return [_pydantic_error_to_issue(err, source=None) for err in e.errors()]
    else:
        return []


def raise_if_validation_errors(
    issues: list[ValidationIssue],
    source: str | None = None,
) -> None:
    """Raise ConfigValidationError for the first issue, if any.

    Raises:
        ConfigValidationError: If `issues` is not empty.
    """
    if issues:
        issue = issues[0]
        msg = f"Invalid configuration value for '{issue.key}'"
        raise ConfigValidationError(
            msg,
            key=issue.key,
            value=issue.actual,
            expected=issue.expected or issue.message,
            source=source or issue.source,
        )
