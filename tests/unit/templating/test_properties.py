from pathlib import Path

import pytest

from mjml_preview.exceptions import PropertyParseError
from mjml_preview.templating import (
    load_property_file,
    merge_properties,
    resolve_properties,
    sample_file_for,
    theme_file_for,
)


class TestPropertyFilePaths:
    def test_theme_file_is_sibling(self) -> None:
        assert theme_file_for(Path("emails/welcome.mjml")) == Path("emails/email-theme.json")

    def test_sample_file_replaces_extension(self) -> None:
        assert sample_file_for(Path("emails/welcome.mjml")) == Path(
            "emails/welcome.sample.json"
        )


class TestLoadPropertyFile:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_property_file(tmp_path / "absent.json") == {}

    def test_parses_json(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        path.write_text('{"a": [1, 2], "b": null}')
        assert load_property_file(path) == {"a": [1, 2], "b": None}

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(PropertyParseError) as exc_info:
            _ = load_property_file(path)

        assert exc_info.value.path == path
        assert exc_info.value.cause is not None


class TestMergeProperties:
    def test_theme_key_plus_document_keys(self) -> None:
        assert merge_properties({"c": 1}, {"x": 2}) == {"theme": {"c": 1}, "x": 2}

    def test_document_theme_key_wins(self) -> None:
        assert merge_properties({"c": 1}, {"theme": "doc"}) == {"theme": "doc"}

    def test_inputs_not_mutated(self) -> None:
        theme = {"c": 1}
        document = {"x": 2}
        _ = merge_properties(theme, document)
        assert theme == {"c": 1}
        assert document == {"x": 2}


class TestResolveProperties:
    def test_untitled_document(self) -> None:
        assert resolve_properties(None) == {"theme": {}}

    def test_no_sibling_files(self, tmp_path: Path) -> None:
        assert resolve_properties(tmp_path / "doc.mjml") == {"theme": {}}

    def test_theme_and_sample(self, tmp_path: Path) -> None:
        (tmp_path / "email-theme.json").write_text('{"color": "red"}')
        (tmp_path / "doc.sample.json").write_text('{"name": "Ada", "n": 3}')

        result = resolve_properties(tmp_path / "doc.mjml")

        assert result == {"theme": {"color": "red"}, "name": "Ada", "n": 3}

    def test_sample_of_other_document_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "other.sample.json").write_text('{"name": "other"}')
        assert resolve_properties(tmp_path / "doc.mjml") == {"theme": {}}

    def test_null_sample_is_empty(self, tmp_path: Path) -> None:
        (tmp_path / "doc.sample.json").write_text("null")
        assert resolve_properties(tmp_path / "doc.mjml") == {"theme": {}}

    def test_non_object_sample_raises(self, tmp_path: Path) -> None:
        (tmp_path / "doc.sample.json").write_text("[1, 2]")
        with pytest.raises(PropertyParseError, match="must be a JSON object"):
            _ = resolve_properties(tmp_path / "doc.mjml")

    def test_invalid_theme_propagates(self, tmp_path: Path) -> None:
        (tmp_path / "email-theme.json").write_text("{")
        with pytest.raises(PropertyParseError):
            _ = resolve_properties(tmp_path / "doc.mjml")
