"""Defensive coercion of numeric and timestamp fields from backend JSON."""
import math
import re
from datetime import datetime, timezone
from typing import Any, Optional, Union

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def coerce_count(value: Any) -> int:
    """Coerce a chip count to a non-negative integer.
    
    Mirrors how the counts arrive from form inputs and JSON: numbers are
    truncated, strings contribute their leading digits, and anything else
    (None, booleans, garbage, NaN, negatives) counts as zero.
    
    Args:
        value: Raw count.
        
    Returns:
        Count, never negative.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(0, value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return max(0, int(value))
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return 0
        return max(0, int(match.group(1)))
    return 0


def coerce_amount(value: Any) -> Union[int, float]:
    """Coerce a monetary field (``"5000.00"``, ``None``...) to a number.
    
    Unlike counts, amounts keep their sign. Integral values come back as int.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_FLOAT.match(value)
        if not match:
            return 0
        number = float(match.group(1))
    else:
        return 0
    
    if not math.isfinite(number):
        return 0
    if number.is_integer():
        return int(number)
    return number


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a backend timestamp into an aware datetime.
    
    Accepts datetimes, ISO-8601 strings (``Z`` suffix included) and epoch
    milliseconds. Naive values are taken as UTC.
    
    Returns:
        The parsed datetime, or None when the value is missing or unparsable.
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
