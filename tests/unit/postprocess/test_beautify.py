import pytest

from mjml_preview.postprocess import (
    STYLE_MARKER,
    beautify_html,
    format_html,
    rename_custom_styles,
    restore_custom_styles,
)


class TestRenameCustomStyles:
    def test_renames_with_marker(self) -> None:
        assert rename_custom_styles("<mj-style>.a { color: red; }</mj-style>") == (
            f"<style {STYLE_MARKER}>.a {{ color: red; }}</style>"
        )

    def test_keeps_attributes(self) -> None:
        assert rename_custom_styles('<mj-style inline="inline">.a{}</mj-style>') == (
            f'<style {STYLE_MARKER} inline="inline">.a{{}}</style>'
        )

    def test_leaves_plain_style(self) -> None:
        text = "<style>.a{}</style>"
        assert rename_custom_styles(text) == text


class TestRestoreCustomStyles:
    def test_restores_marked_block(self) -> None:
        assert restore_custom_styles(f'<style {STYLE_MARKER}="">.a{{}}</style>') == (
            "<mj-style>.a{}</mj-style>"
        )

    def test_restores_attributes(self) -> None:
        text = f'<style {STYLE_MARKER}="" inline="inline">.a{{}}</style>'
        assert restore_custom_styles(text) == '<mj-style inline="inline">.a{}</mj-style>'

    def test_leaves_unmarked_block(self) -> None:
        text = '<style type="text/css">.a{}</style>'
        assert restore_custom_styles(text) == text

    def test_rename_then_restore(self) -> None:
        text = "<mjml><mj-style>.a > .b { color: red; }</mj-style><style>.c{}</style></mjml>"
        assert restore_custom_styles(rename_custom_styles(text)) == text


class TestFormatHtml:
    def test_default_indent_is_two_spaces(self) -> None:
        assert "\n  <p>" in format_html("<div><p>x</p></div>")

    def test_indent_size(self) -> None:
        assert "\n    <p>" in format_html("<div><p>x</p></div>", {"indent_size": 4})

    def test_indent_with_tabs(self) -> None:
        assert "\n\t<p>" in format_html("<div><p>x</p></div>", {"indent_with_tabs": True})

    def test_unknown_options_ignored(self) -> None:
        assert format_html("<p>x</p>", {"wrap_line_length": 80}) == format_html("<p>x</p>")

    def test_negative_indent_raises(self) -> None:
        with pytest.raises(ValueError, match="indent_size"):
            _ = format_html("<p>x</p>", {"indent_size": -1})


class TestBeautifyHtml:
    def test_custom_style_contents_kept(self) -> None:
        text = "<mjml><mj-head><mj-style>.a > .b { color: red; }</mj-style></mj-head></mjml>"

        result = beautify_html(text)

        assert result is not None
        assert "<mj-style>" in result
        assert "</mj-style>" in result
        assert ".a > .b { color: red; }" in result
        assert "&gt;" not in result
        assert STYLE_MARKER not in result

    def test_existing_style_blocks_untouched(self) -> None:
        text = "<html><head><style>.c{}</style></head><body><mj-style>.d{}</mj-style></body></html>"

        result = beautify_html(text)

        assert result is not None
        assert result.count("<style>") == 1
        assert result.count("<mj-style>") == 1

    def test_without_custom_styles_matches_formatter(self) -> None:
        text = "<div><p>x</p></div>"
        assert beautify_html(text, {"indent_size": 3}) == format_html(text, {"indent_size": 3})

    def test_failure_returns_none_and_notifies(self) -> None:
        messages: list[str] = []

        result = beautify_html("<p>x</p>", {"indent_size": -1}, notify=messages.append)

        assert result is None
        assert len(messages) == 1
        assert messages[0].startswith("Failed to beautify document")

    def test_formatter_exception_is_contained(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def broken(text: str, options: object = None) -> str:
            raise RuntimeError("formatter crashed")

        monkeypatch.setattr("mjml_preview.postprocess._beautify.format_html", broken)
        messages: list[str] = []

        assert beautify_html("<p>x</p>", notify=messages.append) is None
        assert "formatter crashed" in messages[0]

    def test_failure_without_notify_is_logged(self) -> None:
        assert beautify_html("<p>x</p>", {"indent_size": -1}) is None
