from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

"""Cell value coercion.

Every CSV cell arrives as a string. ``coerce_value`` turns it into the typed
value written to JSON using a fixed precedence:

1. ``""`` -> ``None``
2. ``"true"`` / ``"false"`` (any case) -> ``True`` / ``False``
3. a string that fully matches the decimal number grammar -> ``int`` or ``float``
4. anything else -> the original string

The numeric check is a full-string match, so prefix-numeric values such as
``"12abc"``, version strings (``"1.2.3"``) and zero-padded identifiers
(``"007"``) are never converted.
Signed and bare-fraction numerals (``"+1"``, ``".5"``, ``"5."``) are accepted.
"""

__all__ = [
    "NUMBER_PATTERN",
    "coerce_value",
    "coerce_row",
]

NUMBER_PATTERN = re.compile(
    r"[+-]?(?:(?:0|[1-9][0-9]*)(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)

# integral floats above this magnitude stay floats
_MAX_SAFE_INTEGER = 2**53


def _to_number(text: str) -> int | float | None:
    if NUMBER_PATTERN.fullmatch(text) is None:
        return None
    if "." not in text and "e" not in text and "E" not in text:
        return int(text)
    value = float(text)
    if not math.isfinite(value):
        return None
    if value.is_integer() and abs(value) <= _MAX_SAFE_INTEGER:
        return int(value)
    return value


def coerce_value(raw: str) -> Any:
    """Convert a raw CSV cell to ``None``, ``bool``, a number or the original string."""
    if raw == "":
        return None
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    number = _to_number(raw)
    if number is None:
        return raw
    return number


def coerce_row(raw_row: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new mapping with every string cell coerced.

    Non-string cells are treated as already typed and copied as-is.
    """
    return {
        key: coerce_value(value) if isinstance(value, str) else value
        for key, value in raw_row.items()
    }
