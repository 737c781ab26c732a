import base64
from pathlib import Path

import pytest

from mjml_preview.postprocess import encode_image, fix_images, image_mime_type


class TestImageMimeType:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("a.png", "image/png"),
            ("a.PNG", "image/png"),
            ("a.gif", "image/gif"),
            ("a.jpg", "image/jpeg"),
            ("a.jpeg", "image/jpeg"),
            ("a.svg", "image/svg+xml"),
        ],
    )
    def test_embeddable(self, name: str, expected: str) -> None:
        assert image_mime_type(Path(name)) == expected

    @pytest.mark.parametrize("name", ["a.txt", "a.css", "a", "a.mjml"])
    def test_not_embeddable(self, name: str) -> None:
        assert image_mime_type(Path(name)) is None


class TestEncodeImage:
    def test_encodes_file(self, tmp_path: Path, png_bytes: bytes) -> None:
        path = tmp_path / "logo.png"
        path.write_bytes(png_bytes)

        encoded = encode_image(path, "logo.png")

        assert encoded == "data:image/png;base64," + base64.b64encode(png_bytes).decode()

    def test_missing_file_returns_original(self, tmp_path: Path) -> None:
        assert encode_image(tmp_path / "nope.png", "nope.png") == "nope.png"

    def test_unsupported_type_returns_original(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        assert encode_image(path, "notes.txt") == "notes.txt"

    def test_empty_file_is_embedded(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.png"
        path.write_bytes(b"")
        assert encode_image(path, "empty.png") == "data:image/png;base64,"


class TestFixImages:
    @pytest.fixture
    def document(self, tmp_path: Path, png_bytes: bytes) -> Path:
        (tmp_path / "logo.png").write_bytes(png_bytes)
        (tmp_path / "img").mkdir()
        (tmp_path / "img" / "hero.png").write_bytes(png_bytes)
        return tmp_path / "welcome.mjml"

    @pytest.fixture
    def data_uri(self, png_bytes: bytes) -> str:
        return "data:image/png;base64," + base64.b64encode(png_bytes).decode()

    def test_double_quoted_src(self, document: Path, data_uri: str) -> None:
        html = '<img src="logo.png" alt="Logo">'
        assert fix_images(html, document) == f'<img src="{data_uri}" alt="Logo">'

    def test_single_quoted_src(self, document: Path, data_uri: str) -> None:
        assert fix_images("<img src='logo.png'>", document) == f"<img src='{data_uri}'>"

    def test_css_url(self, document: Path, data_uri: str) -> None:
        html = "<td style=\"background: url(img/hero.png) no-repeat\">"
        assert fix_images(html, document) == (
            f"<td style=\"background: url({data_uri}) no-repeat\">"
        )

    def test_uppercase_attribute(self, document: Path, data_uri: str) -> None:
        assert fix_images('<IMG SRC="logo.png">', document) == f'<IMG SRC="{data_uri}">'

    def test_leading_slash_resolves_against_document_directory(
        self, document: Path, data_uri: str
    ) -> None:
        html = '<img src="/img/hero.png">'
        assert fix_images(html, document) == f'<img src="{data_uri}">'

    @pytest.mark.parametrize(
        "html",
        [
            '<img src="http://example.com/logo.png">',
            '<img src="https://example.com/logo.png">',
            '<a href="#top"><img src="#logo"></a>',
            '<img src="missing.png">',
            '<img src="">',
            "<p>no images here</p>",
        ],
    )
    def test_leaves_other_references(self, document: Path, html: str) -> None:
        assert fix_images(html, document) == html

    def test_multiple_references(self, document: Path, data_uri: str) -> None:
        html = '<img src="logo.png"><img src="missing.png"><img src="img/hero.png">'
        assert fix_images(html, document) == (
            f'<img src="{data_uri}"><img src="missing.png"><img src="{data_uri}">'
        )

    def test_accepts_string_path(self, document: Path, data_uri: str) -> None:
        assert fix_images('<img src="logo.png">', str(document)) == f'<img src="{data_uri}">'
