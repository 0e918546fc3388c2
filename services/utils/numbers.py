"""Lenient numeric parsing for form input and stored JSON values."""

from __future__ import annotations
import math
from typing import Any, Optional


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a form or JSON value into a finite float.

    Accepts ints, floats and strings (a decimal comma is allowed, as typed
    on Turkish keyboards). Returns None for blanks, booleans, NaN, infinities
    and anything unparsable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", ".")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_number(value: Any, default: float = 0.0) -> float:
    """Like parse_number, but a missing or bad value becomes `default`."""
    number = parse_number(value)
    return default if number is None else number


def is_displayable(value: Any) -> bool:
    """True if value is a finite number the UI can format."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (math.isnan(value) or math.isinf(value))
