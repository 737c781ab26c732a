"""Shared test fixtures for mjml-preview tests."""

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from rich.console import Console

from mjml_preview.compiler import (
    MALFORMED_ROOT_MESSAGE,
    CompileErrorEntry,
    CompileOptions,
    CompileResult,
    has_mjml_root,
)

# Smallest valid PNG: 1x1 transparent pixel
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


@dataclass(slots=True)
class StubTranspiler:
    """Transpiler double that records calls.

    Markup with an ``<mjml>`` root compiles to ``<html>{markup}</html>``;
    anything else reports the malformed-root error.
    """

    calls: list[tuple[str, CompileOptions]] = field(default_factory=list)
    warnings: tuple[str, ...] = ()

    def __call__(self, markup: str, options: CompileOptions) -> CompileResult:
        self.calls.append((markup, options))
        if not has_mjml_root(markup):
            return CompileResult(errors=(CompileErrorEntry(message=MALFORMED_ROOT_MESSAGE),))
        return CompileResult(
            html=f"<html>{markup}</html>",
            errors=tuple(CompileErrorEntry(message=w) for w in self.warnings),
        )


@pytest.fixture
def stub_transpiler() -> StubTranspiler:
    return StubTranspiler()


WriteFile = Callable[[str, str | bytes], Path]


@pytest.fixture
def write_file(tmp_path: Path) -> WriteFile:
    """Return a function that writes a file below tmp_path."""

    def _write(name: str, content: str | bytes) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture(autouse=True)
def isolated_config(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Path:
    """Keep the developer's user config and environment out of every test."""
    for key in list(os.environ):
        if key.startswith("MJML_PREVIEW_"):
            monkeypatch.delenv(key)
    user_config = tmp_path_factory.mktemp("user-config") / "config.toml"
    monkeypatch.setattr(
        "mjml_preview.config._discovery.get_user_config_path", lambda: user_config
    )
    return user_config
