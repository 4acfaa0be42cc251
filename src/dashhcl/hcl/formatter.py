"""Literal rendering for HCL attribute values."""

from __future__ import annotations

import json
import math
from typing import Any

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _escape_char(ch: str) -> str:
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    if ord(ch) < 0x20:
        return f"\\u{ord(ch):04x}"
    return ch


def escape_string(text: str) -> str:
    """Return ``text`` as a double-quoted HCL string literal."""
    return '"' + "".join(_escape_char(ch) for ch in text) + '"'


def format_number(value: int | float) -> str:
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def format_value(value: Any) -> str:
    """Render any decoded JSON value as an HCL literal.

    Strings are quoted and escaped, booleans and numbers are bare, lists and
    objects become compact JSON (which HCL accepts as tuple/object syntax).
    Anything else is rendered as a quoted string.
    """
    if isinstance(value, str):
        return escape_string(value)
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)) and not (
        isinstance(value, float) and not math.isfinite(value)
    ):
        return format_number(value)
    if isinstance(value, (list, tuple, dict)):
        try:
            return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError):
            return escape_string(str(value))
    if value is None:
        return '"null"'
    return escape_string(str(value))


def format_list(values: Any) -> str:
    """Render a sequence attribute; non-sequences become an empty list."""
    if isinstance(values, (list, tuple)):
        return format_value(list(values))
    return "[]"


def format_scalar(value: Any) -> str:
    """Render a value that the provider always expects as a string (``min``, ``scale``)."""
    if isinstance(value, bool):
        return escape_string("true" if value else "false")
    if isinstance(value, (int, float)):
        return escape_string(format_number(value))
    return escape_string(str(value))
