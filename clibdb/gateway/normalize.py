"""ABOUTME: Coercion of raw engine values into stable strings, dates and counts.
ABOUTME: Never raises: unparsable values become a safe default and are logged."""

import logging
import math
import re
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from dateutil import parser as dtparser

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def normalize_text(value: Any) -> str:
    """Convert a raw column value to a trimmed string.

    Examples:
        >>> normalize_text(None)
        ''
        >>> normalize_text("  A1 ")
        'A1'
        >>> normalize_text(42)
        '42'
    """
    if value is None:
        return ""
    return str(value).strip()


def normalize_date(value: Any) -> str | None:
    """Convert a raw date/timestamp column value to an ISO-8601 string.

    Accepts ``date``/``datetime`` objects as returned by the driver and date
    text in the formats dateutil understands ("2024-01-15", "2024/01/15",
    "Jan 15 2024"). Anything else yields None.

    Examples:
        >>> normalize_date(date(2024, 1, 15))
        '2024-01-15T00:00:00'
        >>> normalize_date("not a date") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return datetime.combine(value, time()).isoformat()
    if isinstance(value, str) and value.strip():
        try:
            return dtparser.parse(value.strip()).isoformat()
        except (ValueError, OverflowError):
            pass

    logger.debug("Unparsable date value %r, using None", value)
    return None


def parse_int(value: Any) -> int | None:
    """Parse an integer from a raw value, or None if it has no integer reading.

    Strings are read up to the first non-digit, so "12 pcs" gives 12.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        return int(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def parse_count(value: Any, default: int = 0) -> int:
    """Parse a non-negative count, substituting ``default`` when unparsable.

    Examples:
        >>> parse_count("3")
        3
        >>> parse_count("abc")
        0
        >>> parse_count(-2)
        0
    """
    parsed = parse_int(value)
    if parsed is None:
        if value is not None:
            logger.debug("Unparsable count %r, using %d", value, default)
        return default
    return max(parsed, 0)
