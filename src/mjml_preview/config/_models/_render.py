"""Render and beautify configuration models."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from mjml_preview.compiler import ValidationLevel


class RenderConfig(BaseModel):
    """Render configuration section.

    Attributes:
        minify_html_output: Ask the transpiler to minify its output.
        beautify_html_output: Ask the transpiler to beautify its output.
        validation_level: Transpiler validation level.
        fix_images: Embed local images as data URIs.
        format_output: Run the style-tag-safe beautifier over the HTML.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    minify_html_output: bool = False
    beautify_html_output: bool = True
    validation_level: ValidationLevel = ValidationLevel.SKIP
    fix_images: bool = False
    format_output: bool = False


class BeautifyConfig(BaseModel):
    """Formatter options, passed through to the beautifier.

    Keys other than the declared ones are kept and handed to the formatter,
    which ignores what it does not understand.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="allow")

    indent_size: int = Field(default=2, ge=0)
    indent_char: str = " "
    indent_with_tabs: bool = False

    def to_options(self) -> dict[str, object]:
        return self.model_dump()
