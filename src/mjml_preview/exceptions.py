"""mjml-preview exceptions."""

from pathlib import Path
from typing import Any


class MjmlPreviewError(Exception):
    """Base exception for mjml-preview errors."""


class NotMjmlDocumentError(MjmlPreviewError):
    """Raised when a render is requested for a document that is not MJML."""


# =============================================================================
# Property Exceptions
# =============================================================================


class PropertyParseError(MjmlPreviewError):
    """Raised when a theme or sample-data file contains invalid JSON.

    Attributes:
        path: Path to the file that failed to parse.
        cause: The underlying decode error, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and file context.

        Args:
            message: Human-readable error message.
            path: Path to the file that failed to parse.
            cause: The underlying decode error, if any.
        """
        super().__init__(message)
        self.path: Path = path
        self.cause: Exception | None = cause


# =============================================================================
# Template Exceptions
# =============================================================================


class TemplateError(MjmlPreviewError):
    """Base exception for template resolution errors."""


class TemplateCompileError(TemplateError):
    """Raised when a template cannot be compiled or rendered.

    Attributes:
        source: Name of the template source (usually its path).
        line: 1-based line where the problem was detected, if known.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        line: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and source location."""
        super().__init__(message)
        self.source: str | None = source
        self.line: int | None = line
        self.cause: Exception | None = cause

    def __str__(self) -> str:
        message = super().__str__()
        if self.source and self.line is not None:
            return f"{self.source}:{self.line}: {message}"
        if self.source:
            return f"{self.source}: {message}"
        return message


class PartialNotFoundError(TemplateError):
    """Raised when an included partial file does not exist.

    Attributes:
        name: The partial name as written in the template.
        path: The resolved path that was looked up.
    """

    def __init__(self, message: str, *, name: str, path: Path) -> None:
        """Initialize with error message and partial context."""
        super().__init__(message)
        self.name: str = name
        self.path: Path = path


# =============================================================================
# Post-processing Exceptions
# =============================================================================


class FormatError(MjmlPreviewError):
    """Raised when the HTML formatter fails.

    Attributes:
        cause: The exception raised by the formatter.
    """

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        """Initialize with error message and underlying cause."""
        super().__init__(message)
        self.cause: Exception | None = cause


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(MjmlPreviewError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
