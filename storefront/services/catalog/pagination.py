"""Lenient parsing of pager parameters shared by every list endpoint.

Read paths never reject a bad query-string value: unparseable numbers fall
back to their defaults and non-positive page numbers or sizes collapse to 1.
"""

from __future__ import annotations

import math
from typing import Any


def coerce_int(value: Any, default: int | None = None) -> int | None:
    """Parse an integer the way a query string would carry it."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    text = str(value).strip()
    if not text:
        return default
    try:
        return int(text)
    except ValueError:
        pass
    try:
        parsed = float(text)
    except ValueError:
        return default
    return int(parsed) if math.isfinite(parsed) else default


def coerce_float(value: Any) -> float | None:
    """Parse a price bound; anything unparseable means "no bound"."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        parsed = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            parsed = float(text)
        except ValueError:
            return None
    return parsed if math.isfinite(parsed) else None


def coerce_bool(value: Any) -> bool | None:
    """Only an explicit true switches a boolean filter on."""
    if isinstance(value, bool):
        return value or None
    if value is None:
        return None
    return True if str(value).strip().lower() == "true" else None


def normalize_page(page: Any) -> int:
    parsed = coerce_int(page, 1)
    return parsed if parsed >= 1 else 1


def normalize_page_size(size: Any, default: int, maximum: int) -> int:
    parsed = coerce_int(size, default)
    if parsed < 1:
        return 1
    return min(parsed, maximum)


def page_window(page: int, page_size: int) -> tuple[int, int]:
    """Return ``(skip, limit)`` for a 1-based page."""
    return (page - 1) * page_size, page_size
