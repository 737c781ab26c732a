"""MJML compilation: transpiler adapter and malformed-root retry policy.

Basic usage:
    from mjml_preview.compiler import CompileRequest, compile_with_root_fallback

    request = CompileRequest.for_document(markup, path)
    result = compile_with_root_fallback(request)
    if result.failed:
        for error in result.errors:
            print(error.message)
"""

from ._adapter import MjmlTranspiler, Transpiler, compile_markup, has_mjml_root
from ._models import (
    MALFORMED_ROOT_MESSAGE,
    CompileErrorEntry,
    CompileOptions,
    CompileRequest,
    CompileResult,
    ValidationLevel,
    config_path_for,
)
from ._retry import compile_with_root_fallback, is_malformed_root, wrap_in_root

__all__ = [
    "MALFORMED_ROOT_MESSAGE",
    "CompileErrorEntry",
    "CompileOptions",
    "CompileRequest",
    "CompileResult",
    "MjmlTranspiler",
    "Transpiler",
    "ValidationLevel",
    "compile_markup",
    "compile_with_root_fallback",
    "config_path_for",
    "has_mjml_root",
    "is_malformed_root",
    "wrap_in_root",
]
