"""Project root and config path discovery utilities.

The project root is the nearest directory, starting at a document's directory
and walking upward, that contains ``mjml-preview.toml``.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

from mjml_preview.utils import get_user_config_dir

from ._defaults import DEFAULT_CONFIG

PROJECT_CONFIG_FILE = "mjml-preview.toml"
USER_CONFIG_FILE = "config.toml"


class ConfigLayer(StrEnum):
    """Where a layer of configuration comes from, highest precedence first."""

    CLI = "cli"
    ENV = "env"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """One configuration layer as found on disk or in the environment.

    Attributes:
        name: The layer.
        path: TOML file backing the layer; None for the CLI, env and defaults.
        exists: Whether the file exists or the layer carries values.
        values: Values already known for the layer (CLI overrides, defaults).
    """

    name: ConfigLayer
    path: Path | None
    exists: bool
    values: dict[str, Any]  # pyright: ignore[reportExplicitAny]


def find_project_root(start: Path | None = None) -> Path | None:
    """Find the project root by searching upward for ``mjml-preview.toml``.

    Args:
        start: Directory (or file, whose directory is used) to start
            searching from. Defaults to the current working directory.

    Returns:
        The directory containing the project config file, or None if the
        filesystem root is reached without finding one.
    """
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent

    while True:
        if (current / PROJECT_CONFIG_FILE).is_file():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/mjml-preview/config.toml``
    - macOS: ``~/Library/Application Support/mjml-preview/config.toml``
    - Windows: ``%APPDATA%\mjml-preview\config.toml``

    The path is returned regardless of whether the file exists.
    """
    return get_user_config_dir() / USER_CONFIG_FILE


def _file_exists(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    project_root: Path | None = None,
    *,
    start: Path | None = None,
    include_env: bool = True,
    include_cli: bool = False,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Args:
        project_root: Project root directory. If None, auto-detect by
            searching upward from `start`.
        start: Where project root detection starts. Defaults to the current
            working directory.
        include_env: Include environment variables as a source.
        include_cli: Include CLI overrides as a source.
        cli_overrides: Dictionary of CLI argument overrides. Only used
            if include_cli is True.

    Returns:
        ConfigSource objects in precedence order (highest first). File
        sources that don't exist are included with exists=False.
    """
    sources: list[ConfigSource] = []
    resolved_root = project_root if project_root else find_project_root(start)

    if include_cli:
        sources.append(
            ConfigSource(
                name=ConfigLayer.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides or {},
            )
        )

    if include_env:
        sources.append(
            ConfigSource(name=ConfigLayer.ENV, path=None, exists=True, values={})
        )

    if resolved_root:
        project_path = resolved_root / PROJECT_CONFIG_FILE
        sources.append(
            ConfigSource(
                name=ConfigLayer.PROJECT,
                path=project_path,
                exists=_file_exists(project_path),
                values={},
            )
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigLayer.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigLayer.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
