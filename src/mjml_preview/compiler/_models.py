"""Pydantic models for MJML compile requests and results."""

from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field

MALFORMED_ROOT_MESSAGE = (
    "Malformed MJML. Check that your structure is correct and enclosed in `<mjml>` tags."
)


class ValidationLevel(StrEnum):
    """How strictly the transpiler enforces MJML structure."""

    STRICT = "strict"
    SOFT = "soft"
    SKIP = "skip"


class CompileOptions(BaseModel):
    """Configuration object handed to the transpiler.

    Serializes (``model_dump(by_alias=True)``) to the option names the MJML
    transpiler understands.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, populate_by_name=True)

    minify: bool = False
    beautify: bool = False
    file_path: Path | None = Field(default=None, alias="filePath")
    mjml_config_path: Path | None = Field(default=None, alias="mjmlConfigPath")
    validation_level: ValidationLevel = Field(
        default=ValidationLevel.SKIP, alias="validationLevel"
    )


class CompileRequest(BaseModel):
    """A single markup compilation request."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    markup: str
    file_path: Path | None = None
    config_path: Path | None = None
    minify: bool = False
    beautify: bool = False
    validation_level: ValidationLevel = ValidationLevel.SKIP

    @classmethod
    def for_document(
        cls,
        markup: str,
        file_path: Path | None,
        *,
        project_root: Path | None = None,
        minify: bool = False,
        beautify: bool = False,
        validation_level: ValidationLevel = ValidationLevel.SKIP,
    ) -> Self:
        """Build a request for a document, deriving the transpiler config path."""
        return cls(
            markup=markup,
            file_path=file_path,
            config_path=config_path_for(file_path, project_root),
            minify=minify,
            beautify=beautify,
            validation_level=validation_level,
        )

    def options(self) -> CompileOptions:
        """Return the transpiler configuration for this request."""
        return CompileOptions(
            minify=self.minify,
            beautify=self.beautify,
            file_path=self.file_path,
            mjml_config_path=self.config_path,
            validation_level=self.validation_level,
        )

    def with_markup(self, markup: str) -> Self:
        """Return a copy of this request with different markup."""
        return self.model_copy(update={"markup": markup})


class CompileErrorEntry(BaseModel):
    """A structured error reported by the transpiler.

    Attributes:
        message: Human-readable error message.
        line: Line in the compiled markup, when known.
        tag_name: MJML tag the error relates to, when known.
        formatted_message: Transpiler-formatted message, when provided.
        exception_type: Class name of a wrapped exception.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, populate_by_name=True)

    message: str
    line: int | None = None
    tag_name: str | None = Field(default=None, alias="tagName")
    formatted_message: str | None = Field(default=None, alias="formattedMessage")
    exception_type: str | None = Field(default=None, alias="exceptionType")

    @classmethod
    def from_exception(cls, error: BaseException) -> Self:
        """Wrap an exception raised while compiling."""
        return cls(message=str(error) or type(error).__name__, exception_type=type(error).__name__)

    @classmethod
    def from_transpiler(cls, value: object) -> Self:
        """Normalize an error value reported by a transpiler backend."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            line = value.get("line")
            tag_name = value.get("tagName", value.get("tag_name"))
            formatted = value.get("formattedMessage", value.get("formatted_message"))
            message = value.get("message") or formatted or "Unknown MJML error"
            return cls(
                message=str(message),
                line=line if isinstance(line, int) else None,
                tag_name=str(tag_name) if tag_name is not None else None,
                formatted_message=str(formatted) if formatted is not None else None,
            )
        if isinstance(value, BaseException):
            return cls.from_exception(value)
        return cls(message=str(value))


class CompileResult(BaseModel):
    """Outcome of a compilation.

    An empty ``html`` means the compilation failed; non-empty ``html`` with
    ``errors`` means it succeeded with warnings.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    html: str = ""
    errors: tuple[CompileErrorEntry, ...] = ()

    @property
    def failed(self) -> bool:
        return not self.html

    def to_dict(self) -> dict[str, object]:
        """Return ``{"html": ..., "errors": [{"message": ...}, ...]}``."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def config_path_for(file_path: Path | None, project_root: Path | None = None) -> Path | None:
    """Directory the transpiler searches for its own configuration.

    The project root when one is known, otherwise the document's directory.
    """
    if project_root is not None:
        return project_root
    if file_path is not None:
        return file_path.parent
    return None
