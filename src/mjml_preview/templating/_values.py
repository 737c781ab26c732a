"""Handlebars value semantics: output formatting, truthiness and loose equality."""

import math
import re
from collections.abc import Mapping

from jinja2 import Undefined

_JS_NUMBER_RE = re.compile(
    r"^[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|Infinity)$"
)
_JS_HEX_RE = re.compile(r"^0x[0-9a-f]+$", re.IGNORECASE)


def is_missing(value: object) -> bool:
    """Return True for values Handlebars treats as null or undefined."""
    return value is None or isinstance(value, Undefined)


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def js_string(value: object) -> str:
    """Convert a property value to the string JavaScript would produce.

    Null and undefined become the empty string, booleans are lowercase,
    integral floats drop their fractional part, sequences are joined with
    commas and mappings render as ``[object Object]``.
    """
    if is_missing(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return "[object Object]"
    if isinstance(value, (list, tuple)):
        return ",".join(js_string(item) for item in value)
    return str(value)


def to_output(value: object) -> object:
    """Jinja2 ``finalize`` hook that renders values the way Handlebars does.

    Strings (including ``Markup``) pass through untouched so that
    autoescaping still applies to them and safe markup stays safe.
    """
    if isinstance(value, str):
        return value
    return js_string(value)


def is_truthy(value: object) -> bool:
    """Handlebars truthiness for ``#if`` and ``#unless``.

    Empty sequences are falsy like in Handlebars; mappings are always truthy
    because JavaScript objects are.
    """
    if is_missing(value):
        return False
    if isinstance(value, Mapping):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def _to_number(value: object) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return 0.0
    if _JS_HEX_RE.match(text):
        return float(int(text, 16))
    if _JS_NUMBER_RE.match(text):
        return float(text.replace("Infinity", "inf"))
    return math.nan


def _to_primitive(value: object) -> object:
    if isinstance(value, (Mapping, list, tuple)):
        return js_string(value)
    return value


def loose_equals(left: object, right: object) -> bool:
    """Compare two property values with JavaScript ``==`` semantics.

    ``null`` and ``undefined`` only equal each other. Two containers are equal
    only when they are the same object. Otherwise containers are converted to
    their string form, two strings compare as strings and every other pairing
    compares numerically, so ``"1" == 1`` and ``true == 1`` hold while
    ``"abc" == "abc "`` does not.

    Examples:
        >>> loose_equals("1", 1)
        True
        >>> loose_equals(None, 0)
        False
    """
    if is_missing(left) or is_missing(right):
        return is_missing(left) and is_missing(right)

    left_container = isinstance(left, (Mapping, list, tuple))
    right_container = isinstance(right, (Mapping, list, tuple))
    if left_container and right_container:
        return left is right

    left, right = _to_primitive(left), _to_primitive(right)
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return _to_number(left) == _to_number(right)
