from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from mjml_preview.compiler import (
    MALFORMED_ROOT_MESSAGE,
    CompileOptions,
    CompileRequest,
    CompileResult,
    compile_markup,
    has_mjml_root,
)

if TYPE_CHECKING:
    from tests.conftest import StubTranspiler


class TestHasMjmlRoot:
    @pytest.mark.parametrize(
        "markup",
        [
            "<mjml><mj-body></mj-body></mjml>",
            "  \n<mjml lang=\"en\">",
            "<?xml version=\"1.0\"?>\n<mjml>",
            "<!-- header -->\n<mjml>",
            "<mjml/>",
        ],
    )
    def test_detects_root(self, markup: str) -> None:
        assert has_mjml_root(markup)

    @pytest.mark.parametrize(
        "markup",
        ["<mj-section></mj-section>", "text <mjml>", "<mjml-x>", ""],
    )
    def test_rejects_other_roots(self, markup: str) -> None:
        assert not has_mjml_root(markup)


class TestCompileMarkup:
    def test_returns_transpiler_result_verbatim(self, stub_transpiler: "StubTranspiler") -> None:
        stub_transpiler.warnings = ("deprecated attribute",)
        request = CompileRequest(markup="<mjml></mjml>")

        result = compile_markup(request, stub_transpiler)

        assert result.html == "<html><mjml></mjml></html>"
        assert [e.message for e in result.errors] == ["deprecated attribute"]

    def test_passes_options(self, stub_transpiler: "StubTranspiler") -> None:
        request = CompileRequest.for_document(
            "<mjml></mjml>", Path("/p/a.mjml"), project_root=Path("/root"), minify=True
        )

        _ = compile_markup(request, stub_transpiler)

        _, options = stub_transpiler.calls[0]
        assert options.minify is True
        assert options.file_path == Path("/p/a.mjml")
        assert options.mjml_config_path == Path("/root")

    def test_exception_becomes_error_result(self) -> None:
        def explode(markup: str, options: CompileOptions) -> CompileResult:
            raise RuntimeError("kaput")

        result = compile_markup(CompileRequest(markup="<mjml/>"), explode)

        assert result.html == ""
        assert len(result.errors) == 1
        assert result.errors[0].message == "kaput"
        assert result.errors[0].exception_type == "RuntimeError"

    def test_malformed_root_reported_by_transpiler(self, stub_transpiler: "StubTranspiler") -> None:
        result = compile_markup(CompileRequest(markup="<mj-text/>"), stub_transpiler)
        assert result.failed
        assert result.errors[0].message == MALFORMED_ROOT_MESSAGE
