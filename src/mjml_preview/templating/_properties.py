"""Theme and sample-data property resolution.

A document ``welcome.mjml`` is rendered against two optional sibling files:
``email-theme.json`` (shared by every document in the directory) and
``welcome.sample.json`` (sample data for that document). The merged property
set is ``{"theme": <theme>, **<sample data>}``.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import cast

import orjson

from mjml_preview.exceptions import PropertyParseError
from mjml_preview.utils import get_logger, load_json_file

THEME_FILE_NAME = "email-theme.json"
SAMPLE_FILE_SUFFIX = ".sample.json"


def theme_file_for(document_path: Path) -> Path:
    """Return the theme file that applies to a document."""
    return document_path.with_name(THEME_FILE_NAME)


def sample_file_for(document_path: Path) -> Path:
    """Return the sample-data file for a document.

    The document's extension is replaced, so ``a/welcome.mjml`` maps to
    ``a/welcome.sample.json``.
    """
    return document_path.with_name(document_path.stem + SAMPLE_FILE_SUFFIX)


def load_property_file(path: Path) -> object:
    """Load a JSON property file.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed JSON value, or an empty dict if the file does not exist.

    Raises:
        PropertyParseError: If the file exists but is not valid JSON.
    """
    if not path.is_file():
        return {}
    try:
        return load_json_file(path)
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise PropertyParseError(msg, path=path, cause=e) from e


def merge_properties(theme: object, document: Mapping[str, object]) -> dict[str, object]:
    """Merge a theme and document-level properties into one property set.

    Equivalent to ``{"theme": theme, **document}``: document keys are copied
    verbatim and a document-level ``theme`` key replaces the theme. Neither
    input is modified.
    """
    return {"theme": theme, **document}


def _document_properties(path: Path) -> Mapping[str, object]:
    value = load_property_file(path)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        msg = f"Sample data in {path} must be a JSON object, got {type(value).__name__}"
        raise PropertyParseError(msg, path=path)
    return cast("Mapping[str, object]", value)


def resolve_properties(document_path: Path | None) -> dict[str, object]:
    """Load and merge the property set for a document.

    Args:
        document_path: Path of the document being rendered, or None for an
            unsaved document (which gets an empty property set).

    Returns:
        The merged property set.

    Raises:
        PropertyParseError: If either sibling file contains invalid JSON.
    """
    if document_path is None:
        return merge_properties({}, {})

    theme_path = theme_file_for(document_path)
    sample_path = sample_file_for(document_path)
    theme = load_property_file(theme_path)
    document = _document_properties(sample_path)

    get_logger().debug(
        "properties_resolved",
        document=str(document_path),
        theme_file=str(theme_path) if theme_path.is_file() else None,
        sample_file=str(sample_path) if sample_path.is_file() else None,
        keys=sorted(document),
    )
    return merge_properties(theme, document)
