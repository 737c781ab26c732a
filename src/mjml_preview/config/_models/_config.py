# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing mjml-preview configuration values.
"""

from pathlib import Path
from typing import Any, ClassVar, Self, TypeVar, overload

import tomli_w
from pydantic import BaseModel, ConfigDict, PrivateAttr

from mjml_preview.config._defaults import DEFAULT_CONFIG
from mjml_preview.config._discovery import (
    ConfigLayer,
    ConfigSource,
    discover_sources,
    find_project_root,
)
from mjml_preview.config._loader import copy_value, deep_merge, parse_env_vars, read_toml_file
from mjml_preview.config._models._logging import LogFormat, LoggingConfig, LogLevel
from mjml_preview.config._models._render import BeautifyConfig, RenderConfig

T = TypeVar("T")


def _parse_log_level(value: str) -> LogLevel:
    """Parse log level string to LogLevel enum, defaulting to INFO."""
    try:
        return LogLevel(value)
    except ValueError:
        return LogLevel.INFO


def _parse_log_format(value: str) -> LogFormat:
    """Parse log format string to LogFormat enum, defaulting to JSON."""
    try:
        return LogFormat(value)
    except ValueError:
        return LogFormat.JSON


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    return LoggingConfig(
        level=_parse_log_level(data.get("level", "info")),
        format=_parse_log_format(data.get("format", "json")),
        file=data.get("file", ""),
        max_bytes=data.get("max_bytes", 5_242_880),
        backup_count=data.get("backup_count", 3),
    )


def _parse_render(data: dict[str, Any]) -> RenderConfig:
    return RenderConfig.model_validate(data)


def _parse_beautify(data: dict[str, Any]) -> BeautifyConfig:
    return BeautifyConfig.model_validate(data)


class Config(BaseModel):
    """Configuration container with typed access.

    This class provides immutable, type-safe access to mjml-preview
    configuration. Use factory methods to create instances rather than the
    constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _project_root: Path | None = PrivateAttr(default=None)
    _render: RenderConfig = PrivateAttr(default_factory=RenderConfig)
    _beautify: BeautifyConfig = PrivateAttr(default_factory=BeautifyConfig)
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
        _project_root: Path | None = None,
    ) -> None:
        """Initialize configuration container.

        This constructor is intended for internal use. Use factory methods
        like from_dict(), from_file(), or load() to create Config instances.

        Args:
            _data: The complete merged configuration dictionary.
            _sources: Sources that contributed to this configuration.
            _project_root: Directory holding the project config file, if any.
        """
        super().__init__()
        self._data = _data if _data is not None else copy_value(DEFAULT_CONFIG)
        self._sources = _sources
        self._project_root = _project_root
        self._render = _parse_render(self._data.get("render", {}))
        self._beautify = _parse_beautify(self._data.get("beautify", {}))
        self._logging = _parse_logging(self._data.get("logging", {}))

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        validate: bool = True,
    ) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values.
            validate: Whether to validate the configuration.

        Returns:
            Configuration object from the dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If validation fails (when validate=True).
        """
        from mjml_preview.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            raise_if_validation_errors(validate_config(merged))
        return cls(_data=merged)

    @classmethod
    def from_file(
        cls,
        path: Path,
        *,
        validate: bool = True,
    ) -> Self:
        """Load configuration from a specific file.

        The file's directory becomes the project root.

        Args:
            path: Path to the TOML config file.
            validate: Whether to validate the loaded config.

        Returns:
            Configuration object from the specified file only.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        from mjml_preview.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigLayer.PROJECT,
            path=path,
            exists=True,
            values=data,
        )

        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            raise_if_validation_errors(validate_config(merged), source=str(path))

        return cls(_data=merged, _sources=(source,), _project_root=path.parent)

    @classmethod
    def load(
        cls,
        *,
        project_root: Path | None = None,
        start: Path | None = None,
        include_env: bool = True,
        include_cli: bool = False,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources are merged in precedence order
        (defaults -> user -> project -> env -> cli).

        Args:
            project_root: Project root directory. If None, auto-detect by
                searching upward from `start` for ``mjml-preview.toml``.
            start: Directory (or document) project detection starts from.
            include_env: Include environment variables as a source.
            include_cli: Include CLI overrides.
            cli_overrides: Dict of CLI argument overrides. Only used if
                include_cli is True.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If config files cannot be loaded.
            ConfigValidationError: If merged config fails validation.
        """
        from mjml_preview.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        resolved_root = project_root if project_root else find_project_root(start)
        sources = discover_sources(
            project_root=resolved_root,
            include_env=include_env,
            include_cli=include_cli,
            cli_overrides=cli_overrides,
        )

        # Sources are discovered highest-to-lowest, so merge in reverse
        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        for source in reversed(sources):
            values: dict[str, Any] = {}

            if source.name == ConfigLayer.DEFAULT:
                values = source.values
            elif source.name == ConfigLayer.ENV:
                values = parse_env_vars()
            elif source.name == ConfigLayer.CLI:
                values = cli_overrides or {}
            elif source.path and source.exists:
                values = read_toml_file(source.path)

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )
            if values:
                merged = deep_merge(merged, values)

        raise_if_validation_errors(validate_config(merged))

        return cls(
            _data=merged,
            _sources=tuple(reversed(loaded_sources)),
            _project_root=resolved_root,
        )

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration."""
        return list(self._sources)

    @property
    def project_root(self) -> Path | None:
        """Return the project root, if one was found."""
        return self._project_root

    @property
    def render(self) -> RenderConfig:
        """Return the render configuration section."""
        return self._render

    @property
    def beautify(self) -> BeautifyConfig:
        """Return the beautify configuration section."""
        return self._beautify

    @property
    def logging(self) -> LoggingConfig:
        """Return the logging configuration section."""
        return self._logging

    def render_options(self) -> dict[str, object]:
        """Return the host options mapping read by the render pipeline.

        Returns:
            ``{"minifyHtmlOutput": ..., "beautifyHtmlOutput": ...,
            "beautify": {...formatter options...}}``
        """
        return {
            "minifyHtmlOutput": self._render.minify_html_output,
            "beautifyHtmlOutput": self._render.beautify_html_output,
            "beautify": self._beautify.to_options(),
        }

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> config.get("render.fix_images")
            False
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def to_dict(self, *, include_defaults: bool = True) -> dict[str, Any]:
        """Convert configuration to a dictionary.

        Args:
            include_defaults: Whether to include default values. If False,
                only values that differ from defaults are included.
        """
        if include_defaults:
            return copy_value(self._data)
        return _diff_from_defaults(self._data, DEFAULT_CONFIG)

    def to_toml(self, *, include_defaults: bool = False) -> str:
        """Convert configuration to a TOML string.

        Args:
            include_defaults: Whether to include default values. If False,
                only values that differ from defaults are included.
        """
        return tomli_w.dumps(self.to_dict(include_defaults=include_defaults))


def _diff_from_defaults(
    data: dict[str, Any],
    defaults: dict[str, Any],
) -> dict[str, Any]:
    """Extract values that differ from defaults."""
    result: dict[str, Any] = {}

    for key, value in data.items():
        if key not in defaults:
            result[key] = copy_value(value)
        elif isinstance(value, dict) and isinstance(defaults[key], dict):
            nested_diff = _diff_from_defaults(value, defaults[key])
            if nested_diff:
                result[key] = nested_diff
        elif value != defaults[key]:
            result[key] = copy_value(value)

    return result
