from pathlib import Path
from typing import cast

import orjson


def load_json(json_str: str | bytes) -> object:
    """Parse a JSON document.

    Args:
        json_str: The JSON text to parse.

    Returns:
        The parsed JSON value.

    Raises:
        orjson.JSONDecodeError: If the text is not valid JSON.
    """
    return cast("object", orjson.loads(json_str))


def load_json_file(file_path: Path) -> object:
    """Load and parse a JSON file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        The parsed JSON value.

    Raises:
        OSError: If the file cannot be read.
        orjson.JSONDecodeError: If the content is not valid JSON.
    """
    return load_json(file_path.read_bytes())
