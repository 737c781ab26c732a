"""Retry policy for documents that lack the ``<mjml>`` root element.

Partials are usually bare fragments (``<mj-section>...``) and cannot be
compiled on their own. When the transpiler reports the malformed-root error
and nothing else, the markup is wrapped in ``<mjml><mj-body>`` and compiled
once more. The second result is final whatever it contains.
"""

from mjml_preview.utils import get_logger

from ._adapter import Transpiler, compile_markup
from ._models import MALFORMED_ROOT_MESSAGE, CompileRequest, CompileResult


def is_malformed_root(result: CompileResult) -> bool:
    """Return True if the only reported error is the malformed-root error."""
    return len(result.errors) == 1 and result.errors[0].message == MALFORMED_ROOT_MESSAGE


def wrap_in_root(markup: str) -> str:
    """Wrap a fragment in the ``<mjml><mj-body>`` root elements."""
    return f"<mjml><mj-body>{markup}</mj-body></mjml>"


def compile_with_root_fallback(
    request: CompileRequest,
    transpiler: Transpiler | None = None,
) -> CompileResult:
    """Compile markup, retrying once with a wrapped root on a malformed-root error.

    Args:
        request: The compile request.
        transpiler: Backend to use. Defaults to `MjmlTranspiler`.

    Returns:
        The first result, or the result of the single retry.
    """
    first = compile_markup(request, transpiler)
    if not is_malformed_root(first):
        return first

    get_logger().info(
        "compile_retry_wrapped_root",
        file=str(request.file_path) if request.file_path else None,
    )
    return compile_markup(request.with_markup(wrap_in_root(request.markup)), transpiler)
