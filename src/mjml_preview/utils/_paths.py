from pathlib import Path

import platformdirs

APP_NAME = "mjml-preview"


def get_user_config_dir() -> Path:
    """Get the platform-specific user configuration directory."""
    return platformdirs.user_config_path(APP_NAME)


def get_user_log_dir() -> Path:
    """Get the platform-specific user log directory."""
    return platformdirs.user_log_path(APP_NAME)


def get_cli_log_file() -> Path:
    """Get the path to the default CLI log file."""
    return get_user_log_dir() / "cli.log"
