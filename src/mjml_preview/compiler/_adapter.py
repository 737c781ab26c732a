"""Markup compiler adapter.

Wraps an MJML-to-HTML transpiler behind a small protocol. The adapter never
raises: whatever the backend throws is turned into a failed `CompileResult`.
"""

import io
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from mjml_preview.utils import get_logger

from ._models import (
    MALFORMED_ROOT_MESSAGE,
    CompileErrorEntry,
    CompileOptions,
    CompileRequest,
    CompileResult,
    ValidationLevel,
)

_MJML_ROOT_RE = re.compile(
    r"\A\s*(?:<\?xml[^>]*\?>\s*)?(?:<!--.*?-->\s*)*<mjml[\s>/]",
    re.DOTALL,
)


class Transpiler(Protocol):
    """An MJML-to-HTML transpiler backend."""

    def __call__(self, markup: str, options: CompileOptions) -> CompileResult: ...


def has_mjml_root(markup: str) -> bool:
    """Return True if the markup's root element is ``<mjml>``."""
    return _MJML_ROOT_RE.match(markup) is not None


@dataclass(frozen=True, slots=True)
class MjmlTranspiler:
    """Transpiler backed by the ``mjml`` package.

    Documents whose root element is not ``<mjml>`` are rejected with the
    malformed-root error instead of being handed to the backend. ``beautify``
    is applied with the HTML formatter; ``minify`` and validation levels other
    than ``skip`` are not supported by this backend and are ignored.

    Attributes:
        format_options: Formatter options used when ``beautify`` is requested.
    """

    format_options: Mapping[str, object] = field(default_factory=dict)

    def __call__(self, markup: str, options: CompileOptions) -> CompileResult:
        from mjml import mjml_to_html  # noqa: PLC0415

        from mjml_preview.postprocess import format_html  # noqa: PLC0415

        if not has_mjml_root(markup):
            return CompileResult(errors=(CompileErrorEntry(message=MALFORMED_ROOT_MESSAGE),))

        logger = get_logger()
        if options.minify:
            logger.debug("transpiler_option_ignored", option="minify")
        if options.validation_level != ValidationLevel.SKIP:
            logger.debug(
                "transpiler_option_ignored",
                option="validationLevel",
                value=options.validation_level.value,
            )

        template_dir = str(options.file_path.parent) if options.file_path else None
        output = mjml_to_html(io.StringIO(markup), template_dir=template_dir)

        html = str(getattr(output, "html", "") or "")
        errors = tuple(
            CompileErrorEntry.from_transpiler(error)
            for error in (getattr(output, "errors", None) or ())
        )
        if options.beautify and html:
            html = format_html(html, self.format_options)
        return CompileResult(html=html, errors=errors)


def compile_markup(request: CompileRequest, transpiler: Transpiler | None = None) -> CompileResult:
    """Compile markup to HTML.

    Args:
        request: The compile request.
        transpiler: Backend to use. Defaults to `MjmlTranspiler`.

    Returns:
        The backend's result verbatim, or a result with empty HTML and the
        wrapped exception as its only error if the backend raised.
    """
    backend: Transpiler = transpiler if transpiler is not None else MjmlTranspiler()
    logger = get_logger()
    try:
        result = backend(request.markup, request.options())
    except Exception as e:  # noqa: BLE001
        logger.warning(
            "compile_raised",
            file=str(request.file_path) if request.file_path else None,
            error=str(e),
            error_type=type(e).__name__,
        )
        return CompileResult(errors=(CompileErrorEntry.from_exception(e),))

    logger.debug(
        "compile_finished",
        file=str(request.file_path) if request.file_path else None,
        html_length=len(result.html),
        error_count=len(result.errors),
    )
    return result
