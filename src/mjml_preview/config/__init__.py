"""mjml-preview configuration.

Layered TOML configuration: built-in defaults, the user config file, the
project's ``mjml-preview.toml``, ``MJML_PREVIEW_*`` environment variables
and CLI overrides, merged in that order.

Example:
    >>> from mjml_preview.config import Config
    >>> config = Config.load()
    >>> config.render.beautify_html_output
    True
"""

from mjml_preview.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._discovery import (
    PROJECT_CONFIG_FILE,
    ConfigLayer,
    ConfigSource,
    discover_sources,
    find_project_root,
    get_user_config_path,
)
from ._load import safe_load_config
from ._loader import deep_merge, parse_env_vars, parse_string_value, read_toml_file, set_nested_key
from ._models import (
    BeautifyConfig,
    Config,
    LogFormat,
    LoggingConfig,
    LogLevel,
    RenderConfig,
)
from ._validation import ValidationIssue, raise_if_validation_errors, validate_config

__all__ = [
    "DEFAULT_CONFIG",
    "PROJECT_CONFIG_FILE",
    "BeautifyConfig",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigLayer",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RenderConfig",
    "ValidationIssue",
    "deep_merge",
    "discover_sources",
    "find_project_root",
    "get_user_config_path",
    "parse_env_vars",
    "parse_string_value",
    "raise_if_validation_errors",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
    "validate_config",
]
