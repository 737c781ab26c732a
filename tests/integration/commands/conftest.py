from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from rich.console import Console

from mjml_preview.cli import create_app

if TYPE_CHECKING:
    from tests.conftest import StubTranspiler


@pytest.fixture(autouse=True)
def cli_log_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Path:
    """Send CLI logs to a temporary file instead of the user log directory."""
    log_file = tmp_path_factory.mktemp("logs") / "cli.log"
    monkeypatch.setenv("MJML_PREVIEW_LOGGING__FILE", str(log_file))
    return log_file


@pytest.fixture
def mjml_cli_with_exit_code(console: Console) -> Callable[..., int]:
    """Run the CLI, including global options, and return the exit code."""

    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app.meta(args)
        except SystemExit as e:
            if e.code is None:
                return 0
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run


@pytest.fixture
def cli_transpiler(
    monkeypatch: pytest.MonkeyPatch, stub_transpiler: "StubTranspiler"
) -> "StubTranspiler":
    """Replace the mjml backend with the recording stub for CLI runs."""
    monkeypatch.setattr("mjml_preview.compiler._adapter.MjmlTranspiler", lambda: stub_transpiler)
    return stub_transpiler
