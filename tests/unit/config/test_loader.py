from pathlib import Path

import pytest

from mjml_preview.config import (
    ConfigLoadError,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)


class TestReadTomlFile:
    def test_reads_table(self, tmp_path: Path) -> None:
        path = tmp_path / "c.toml"
        path.write_text("[render]\nfix_images = true\n")
        assert read_toml_file(path) == {"render": {"fix_images": True}}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            _ = read_toml_file(tmp_path / "missing.toml")

    def test_parse_error_has_location(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[render]\nfix_images = \n")

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = read_toml_file(path)

        assert exc_info.value.path == path
        assert "Failed to parse TOML file" in str(exc_info.value)


class TestDeepMerge:
    def test_nested_merge(self) -> None:
        base = {"render": {"a": 1, "b": 2}, "x": 1}
        override = {"render": {"b": 3}}
        assert deep_merge(base, override) == {"render": {"a": 1, "b": 3}, "x": 1}

    def test_lists_replaced(self) -> None:
        assert deep_merge({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}

    def test_inputs_untouched(self) -> None:
        base = {"render": {"a": [1]}}
        result = deep_merge(base, {})
        result["render"]["a"].append(2)
        assert base == {"render": {"a": [1]}}


class TestParseStringValue:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("FALSE", False),
            ("4", 4),
            ("1.5", 1.5),
            ('{"a": 1}', {"a": 1}),
            ("[1, 2]", [1, 2]),
            ("[oops", "[oops"),
            ("strict", "strict"),
        ],
    )
    def test_inference(self, raw: str, expected: object) -> None:
        assert parse_string_value(raw) == expected


class TestParseEnvVars:
    def test_nested_keys(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MJML_PREVIEW_RENDER__FIX_IMAGES", "true")
        monkeypatch.setenv("MJML_PREVIEW_BEAUTIFY__INDENT_SIZE", "4")
        monkeypatch.setenv("OTHER_RENDER__FIX_IMAGES", "false")

        assert parse_env_vars() == {"render": {"fix_images": True}, "beautify": {"indent_size": 4}}

    def test_bare_prefix_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MJML_PREVIEW_", "x")
        assert parse_env_vars() == {}


def test_set_nested_key_replaces_scalars() -> None:
    data: dict[str, object] = {"render": 1}
    set_nested_key(data, "render.fix_images", True)
    assert data == {"render": {"fix_images": True}}
