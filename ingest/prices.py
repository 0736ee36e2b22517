"""Monetary value parsing and display."""

import math
import re
from typing import Any

__all__ = ["coerce_price", "format_price"]

_CURRENCY_CHARS = re.compile(r"[$,]")


def coerce_price(value: Any) -> float:
    """Normalize a retail price cell to a non-negative float.

    Strips ``$`` and thousands separators before parsing. Empty, missing or
    unparsable values become ``0``. The result is rounded to cents, so
    re-coercing a coerced or formatted value is a no-op.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        cleaned = _CURRENCY_CHARS.sub("", str(value)).strip()
        if not cleaned:
            return 0.0
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0

    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    # Whole cents, so the displayed price parses back to the same value
    return round(number, 2)


def format_price(value: Any) -> str:
    """Format a price for display, e.g. ``$1234.50``."""
    return f"${coerce_price(value):.2f}"
