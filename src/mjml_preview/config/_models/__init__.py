"""Configuration models."""

from ._config import Config
from ._logging import LogFormat, LoggingConfig, LogLevel
from ._render import BeautifyConfig, RenderConfig

__all__ = [
    "BeautifyConfig",
    "Config",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RenderConfig",
]
