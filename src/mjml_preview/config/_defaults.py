"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.

Note: DEFAULT_CONFIG is a plain dict so it can be passed straight to
deep_merge, which copies its inputs.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "render": {
        "minify_html_output": False,
        "beautify_html_output": True,
        "validation_level": "skip",
        "fix_images": False,
        "format_output": False,
    },
    "beautify": {
        "indent_size": 2,
        "indent_char": " ",
    },
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
        "max_bytes": 5_242_880,
        "backup_count": 3,
    },
}
