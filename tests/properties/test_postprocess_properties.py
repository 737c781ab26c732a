from pathlib import Path

from hypothesis import given, strategies as st

from mjml_preview.postprocess import STYLE_MARKER, beautify_html, fix_images

css_text = st.text(alphabet="abcdefgh .#>:;{}-0123456789", max_size=40)
reference = st.text(alphabet="abcdefghij-_/.", min_size=1, max_size=20)


@given(css=css_text)
def test_beautify_keeps_custom_style_blocks(css: str) -> None:
    result = beautify_html(f"<mjml><mj-head><mj-style>{css}</mj-style></mj-head></mjml>")

    assert result is not None
    assert result.count("<mj-style>") == 1
    assert result.count("</mj-style>") == 1
    assert css.strip() in result
    assert STYLE_MARKER not in result


no_references = st.text(max_size=60).filter(
    lambda t: "src" not in t.lower() and "url" not in t.lower()
)


@given(html=no_references)
def test_fix_images_leaves_text_without_references(html: str) -> None:
    assert fix_images(html, Path("/nonexistent/doc.mjml")) == html


@given(suffix=reference)
def test_fix_images_leaves_remote_references(suffix: str) -> None:
    html = f'<img src="http{suffix}">'
    assert fix_images(html, Path("/nonexistent/doc.mjml")) == html


@given(name=reference)
def test_fix_images_leaves_missing_files(name: str) -> None:
    html = f'<img src="{name}"><div style="background: url({name})"></div>'
    assert fix_images(html, Path("/nonexistent/doc.mjml")) == html
