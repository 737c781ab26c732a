"""mjml-preview: render MJML email templates with Handlebars-style data to HTML.

Basic usage:
    from pathlib import Path

    from mjml_preview import RenderContext, render_document

    path = Path("emails/welcome.mjml")
    context = RenderContext(text=path.read_text(), path=path)
    output = render_document(context, fix_images=True)
    if output.failed:
        for error in output.errors:
            print(error.message)
"""

__version__ = "0.1.0"

from mjml_preview.exceptions import (  # noqa: E402
    MjmlPreviewError,
    NotMjmlDocumentError,
    PartialNotFoundError,
    PropertyParseError,
    TemplateCompileError,
    TemplateError,
)
from mjml_preview.pipeline import (  # noqa: E402
    RenderContext,
    RenderOutput,
    compile_content,
    is_mjml_document,
    render_document,
)

__all__ = [
    "MjmlPreviewError",
    "NotMjmlDocumentError",
    "PartialNotFoundError",
    "PropertyParseError",
    "RenderContext",
    "RenderOutput",
    "TemplateCompileError",
    "TemplateError",
    "__version__",
    "compile_content",
    "is_mjml_document",
    "render_document",
]
