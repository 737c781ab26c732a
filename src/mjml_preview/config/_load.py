import os
import sys
from pathlib import Path

from mjml_preview.exceptions import ConfigError

from ._models import Config

STRICT_CONFIG_ENV = "MJML_PREVIEW_STRICT_CONFIG"


def _fail_or_warn(error_msg: str, warning: str, *, strict_mode: bool) -> tuple[Config, str]:
    if strict_mode:
        print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
        sys.exit(1)
    print(f"Warning: {warning}", file=sys.stderr)  # noqa: T201
    return Config.from_dict({}), error_msg


def safe_load_config(
    *,
    config_path: Path | None = None,
    project_root: Path | None = None,
    start: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Handles errors based on the MJML_PREVIEW_STRICT_CONFIG environment
    variable:
    - If unset or "0": warn to stderr and return the default config
    - If "1": fail fast with sys.exit(1)

    When config_path is provided, the file must exist (explicit user request).

    Args:
        config_path: Explicit path to config file (--config flag).
        project_root: Project root directory override (--project-root flag).
        start: Directory (or document) project root detection starts from.
        cli_overrides: CLI argument overrides to pass to Config.load().

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
        On failure (non-strict mode), returns the default Config with the
        error message.
    """
    strict_mode = os.environ.get(STRICT_CONFIG_ENV, "0") == "1"

    try:
        if config_path is not None:
            if not config_path.exists():
                print(f"Error: Config file not found: {config_path}", file=sys.stderr)  # noqa: T201
                sys.exit(1)
            return Config.from_file(config_path), None

        config = Config.load(
            project_root=project_root,
            start=start,
            include_env=True,
            include_cli=cli_overrides is not None,
            cli_overrides=cli_overrides,
        )
    except ConfigError as e:
        return _fail_or_warn(str(e), f"Failed to load config: {e}", strict_mode=strict_mode)
    except FileNotFoundError as e:
        return _fail_or_warn(str(e), f"Config file not found: {e}", strict_mode=strict_mode)
    except OSError as e:
        error_msg = f"Failed to load config: {e}"
        return _fail_or_warn(error_msg, error_msg, strict_mode=strict_mode)
    else:
        return config, None
