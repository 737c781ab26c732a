"""Integration tests for the format command."""

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from tests.conftest import WriteFile

DOCUMENT = "<mjml><mj-head><mj-style>.a > .b { color: red; }</mj-style></mj-head></mjml>"


class TestFormat:
    def test_prints_formatted_document(
        self,
        write_file: "WriteFile",
        capsys: pytest.CaptureFixture[str],
        mjml_cli_with_exit_code: Callable[..., int],
    ) -> None:
        path = write_file("doc.mjml", DOCUMENT)

        exit_code = mjml_cli_with_exit_code("format", str(path))

        assert exit_code == 0
        out = capsys.readouterr().out
        assert out.startswith("<mjml>\n  <mj-head>")
        assert ".a > .b { color: red; }" in out
        assert path.read_text() == DOCUMENT

    def test_write_in_place(
        self,
        write_file: "WriteFile",
        capsys: pytest.CaptureFixture[str],
        mjml_cli_with_exit_code: Callable[..., int],
    ) -> None:
        path = write_file("doc.mjml", DOCUMENT)

        exit_code = mjml_cli_with_exit_code("format", str(path), "--write")

        assert exit_code == 0
        content = path.read_text()
        assert content.startswith("<mjml>\n  <mj-head>")
        assert "<mj-style>" in content
        assert "Formatted" in capsys.readouterr().err

    def test_uses_project_indent(
        self,
        write_file: "WriteFile",
        capsys: pytest.CaptureFixture[str],
        mjml_cli_with_exit_code: Callable[..., int],
    ) -> None:
        _ = write_file("mjml-preview.toml", "[beautify]\nindent_size = 4\n")
        path = write_file("doc.mjml", DOCUMENT)

        exit_code = mjml_cli_with_exit_code("format", str(path))

        assert exit_code == 0
        assert capsys.readouterr().out.startswith("<mjml>\n    <mj-head>")

    def test_formatter_failure(
        self,
        write_file: "WriteFile",
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        mjml_cli_with_exit_code: Callable[..., int],
    ) -> None:
        def broken(text: str, options: object = None) -> str:
            raise RuntimeError("formatter crashed")

        monkeypatch.setattr("mjml_preview.postprocess._beautify.format_html", broken)
        path = write_file("doc.mjml", DOCUMENT)

        exit_code = mjml_cli_with_exit_code("format", str(path), "--write")

        assert exit_code == 3
        assert path.read_text() == DOCUMENT
        assert "formatter crashed" in capsys.readouterr().err
