"""Document render pipeline.

Runs a document through property resolution, template resolution, MJML
compilation with the malformed-root retry, and the optional image inlining
and beautification passes.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from mjml_preview.compiler import (
    CompileErrorEntry,
    CompileRequest,
    CompileResult,
    Transpiler,
    ValidationLevel,
    compile_with_root_fallback,
)
from mjml_preview.exceptions import NotMjmlDocumentError
from mjml_preview.postprocess import beautify_html
from mjml_preview.postprocess import fix_images as inline_images
from mjml_preview.templating import TemplateHelpers, render_template_string, resolve_properties
from mjml_preview.utils import get_logger

MJML_LANGUAGE_ID = "mjml"
MJML_EXTENSION = ".mjml"

MINIFY_OPTION = "minifyHtmlOutput"
BEAUTIFY_OPTION = "beautifyHtmlOutput"
FORMAT_OPTIONS_KEY = "beautify"


@dataclass(frozen=True, slots=True)
class RenderContext:
    """A document handed to the pipeline by its host.

    Attributes:
        text: Raw document text.
        path: Document path, or None for an untitled document.
        options: Host options (``minifyHtmlOutput``, ``beautifyHtmlOutput``
            and the ``beautify`` formatter options).
        project_root: Project root, when the host knows one.
        language_id: Language identifier assigned by the host.
    """

    text: str
    path: Path | None = None
    options: Mapping[str, object] = field(default_factory=dict)
    project_root: Path | None = None
    language_id: str = MJML_LANGUAGE_ID

    def option(self, key: str, *, default: bool) -> bool:
        value = self.options.get(key, default)
        return bool(value)

    def format_options(self) -> Mapping[str, object]:
        value = self.options.get(FORMAT_OPTIONS_KEY)
        if isinstance(value, Mapping):
            return value  # pyright: ignore[reportUnknownVariableType]
        return {}


@dataclass(frozen=True, slots=True)
class RenderOutput:
    """Final HTML and compiler errors for one render.

    Attributes:
        html: Rendered HTML; empty when compilation failed.
        errors: Errors reported by the compiler, in order.
    """

    html: str
    errors: tuple[CompileErrorEntry, ...] = ()

    @property
    def failed(self) -> bool:
        return not self.html


def _resolve_templates(context: RenderContext, helpers: TemplateHelpers | None) -> str:
    properties = resolve_properties(context.path)
    return render_template_string(
        context.text,
        properties,
        base_dir=context.path.parent if context.path else None,
        source_name=str(context.path) if context.path else "<untitled>",
        source_path=context.path,
        helpers=helpers,
    )


def is_mjml_document(context: RenderContext) -> bool:
    """Return True if the host document is an MJML document.

    Untitled documents qualify on their language id alone.
    """
    if context.language_id != MJML_LANGUAGE_ID:
        return False
    return context.path is None or context.path.suffix.lower() == MJML_EXTENSION


def compile_content(
    context: RenderContext,
    *,
    validation: ValidationLevel = ValidationLevel.SKIP,
    transpiler: Transpiler | None = None,
    helpers: TemplateHelpers | None = None,
) -> CompileResult:
    """Resolve templates in a document and compile it to HTML.

    Compilation is requested with ``minify`` and ``beautify`` off; those are
    applied by `render_document`.

    Args:
        context: The document to compile.
        validation: Transpiler validation level.
        transpiler: Transpiler backend. Defaults to `MjmlTranspiler`.
        helpers: Extra template helpers.

    Returns:
        The compile result; compiler failures are reported in its errors.

    Raises:
        PropertyParseError: If a theme or sample-data file is invalid JSON.
        TemplateCompileError: If the template is invalid.
        PartialNotFoundError: If an included partial does not exist.
    """
    markup = _resolve_templates(context, helpers)
    request = CompileRequest.for_document(
        markup,
        context.path,
        project_root=context.project_root,
        validation_level=validation,
    )
    return compile_with_root_fallback(request, transpiler)


def render_document(  # noqa: PLR0913
    context: RenderContext,
    *,
    fix_images: bool = False,
    minify: bool | None = None,
    beautify: bool | None = None,
    format_output: bool = False,
    validation: ValidationLevel = ValidationLevel.SKIP,
    transpiler: Transpiler | None = None,
    helpers: TemplateHelpers | None = None,
    notify: Callable[[str], object] | None = None,
) -> RenderOutput:
    """Render a document to final HTML.

    Args:
        context: The document to render.
        fix_images: Embed local images as data URIs.
        minify: Ask the transpiler to minify. Defaults to the
            ``minifyHtmlOutput`` option.
        beautify: Ask the transpiler to beautify. Defaults to the
            ``beautifyHtmlOutput`` option.
        format_output: Run the style-tag-safe beautifier over the HTML.
        validation: Transpiler validation level.
        transpiler: Transpiler backend. Defaults to `MjmlTranspiler`.
        helpers: Extra template helpers.
        notify: Receives formatter failure messages.

    Returns:
        The rendered output. ``output.failed`` is True when no HTML was
        produced; ``output.errors`` then explains why.

    Raises:
        NotMjmlDocumentError: If the document is not an MJML document.
        PropertyParseError: If a theme or sample-data file is invalid JSON.
        TemplateCompileError: If the template is invalid.
        PartialNotFoundError: If an included partial does not exist.
    """
    if not is_mjml_document(context):
        msg = f"Not an MJML document: {context.path or '<untitled>'} ({context.language_id})"
        raise NotMjmlDocumentError(msg)

    logger = get_logger()
    markup = _resolve_templates(context, helpers)
    request = CompileRequest.for_document(
        markup,
        context.path,
        project_root=context.project_root,
        minify=context.option(MINIFY_OPTION, default=False) if minify is None else minify,
        beautify=context.option(BEAUTIFY_OPTION, default=False) if beautify is None else beautify,
        validation_level=validation,
    )
    result = compile_with_root_fallback(request, transpiler)

    html = result.html
    if fix_images and html and context.path is not None:
        html = inline_images(html, context.path)

    if format_output and html:
        formatted = beautify_html(html, context.format_options(), notify=notify)
        if formatted is not None:
            html = formatted

    logger.info(
        "document_rendered",
        file=str(context.path) if context.path else None,
        failed=not html,
        error_count=len(result.errors),
    )
    return RenderOutput(html=html, errors=result.errors)
