"""Style-tag-safe HTML beautification.

The formatter only leaves the contents of standard ``<style>`` elements
alone; ``<mj-style>`` contents would be treated as text and escaped. Custom
style blocks are therefore renamed to marked ``<style>`` blocks before
formatting and renamed back afterwards. The marker attribute keeps
pre-existing ``<style>`` blocks out of the restore step.
"""

import re
from collections.abc import Callable, Mapping

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from mjml_preview.exceptions import FormatError
from mjml_preview.utils import get_logger

STYLE_MARKER = "data-mj-style"

_CUSTOM_STYLE_BLOCK_RE = re.compile(
    r"<mj-style\b([^>]*)>(.*?)</mj-style\s*>",
    re.IGNORECASE | re.DOTALL,
)
_STYLE_BLOCK_RE = re.compile(
    r"<style\b([^>]*)>(.*?)</style\s*>",
    re.IGNORECASE | re.DOTALL,
)
_MARKER_ATTR_RE = re.compile(
    r"""\s+""" + STYLE_MARKER + r"""(?:=(?:""|''))?(?=[\s/>]|$)""",
    re.IGNORECASE,
)

Notify = Callable[[str], object]


def rename_custom_styles(text: str) -> str:
    """Rename ``<mj-style>`` blocks to marked ``<style>`` blocks."""
    return _CUSTOM_STYLE_BLOCK_RE.sub(
        lambda m: f"<style {STYLE_MARKER}{m.group(1)}>{m.group(2)}</style>",
        text,
    )


def restore_custom_styles(text: str) -> str:
    """Rename marked ``<style>`` blocks back to ``<mj-style>`` blocks.

    Style blocks without the marker are returned unchanged.
    """

    def restore(match: re.Match[str]) -> str:
        attrs = match.group(1)
        if _MARKER_ATTR_RE.search(attrs) is None:
            return match.group(0)
        attrs = _MARKER_ATTR_RE.sub("", attrs)
        return f"<mj-style{attrs}>{match.group(2)}</mj-style>"

    return _STYLE_BLOCK_RE.sub(restore, text)


def _formatter(options: Mapping[str, object]) -> HTMLFormatter:
    """Build an HTMLFormatter from js-beautify style options.

    Recognized keys: ``indent_size``, ``indent_char`` and
    ``indent_with_tabs``. Other keys are ignored.
    """
    if options.get("indent_with_tabs"):
        indent = "\t"
    else:
        indent_size = int(str(options.get("indent_size", 2)))
        indent_char = str(options.get("indent_char", " "))
        if indent_size < 0:
            msg = f"indent_size must not be negative, got {indent_size}"
            raise ValueError(msg)
        indent = indent_char * indent_size
    return HTMLFormatter(entity_substitution=EntitySubstitution.substitute_xml, indent=indent)


def format_html(text: str, options: Mapping[str, object] | None = None) -> str:
    """Reformat HTML with BeautifulSoup's pretty printer.

    Args:
        text: The HTML (or MJML) to format.
        options: js-beautify style formatting options.

    Returns:
        The formatted text.
    """
    soup = BeautifulSoup(text, "html.parser")
    return soup.prettify(formatter=_formatter(options or {}))


def _log_message(message: str) -> None:
    get_logger().error("beautify_failed", error=message)


def beautify_html(
    text: str,
    options: Mapping[str, object] | None = None,
    *,
    notify: Notify | None = None,
) -> str | None:
    """Beautify HTML or MJML while keeping ``<mj-style>`` blocks intact.

    Args:
        text: The document to format.
        options: js-beautify style formatting options.
        notify: Receives a user-facing message if formatting fails.
            Defaults to logging the message.

    Returns:
        The formatted document, or None if formatting failed (the caller
        should keep the unformatted text).
    """
    try:
        replaced = rename_custom_styles(text)
        beautified = format_html(replaced, options)
    except Exception as e:  # noqa: BLE001
        error = FormatError(f"Failed to beautify document: {e}", cause=e)
        (notify or _log_message)(str(error))
        return None

    if replaced != text:
        return restore_custom_styles(beautified)
    return beautified
