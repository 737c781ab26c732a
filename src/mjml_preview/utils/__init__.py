"""Shared utilities for mjml-preview."""

from ._json import load_json, load_json_file
from ._logging import (
    create_cli_logger,
    get_logger,
    reset_logger,
    use_logger,
)
from ._paths import get_cli_log_file, get_user_config_dir, get_user_log_dir

__all__ = [
    "create_cli_logger",
    "get_cli_log_file",
    "get_logger",
    "get_user_config_dir",
    "get_user_log_dir",
    "load_json",
    "load_json_file",
    "reset_logger",
    "use_logger",
]
