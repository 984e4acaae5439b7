"""Display formatting in the club's locale (en-IN, INR, IST)."""
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from chipledger.config import config
from chipledger.utils.coercion import coerce_amount, parse_timestamp

CURRENCY_SYMBOL = "₹"

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _display_zone() -> ZoneInfo:
    try:
        return ZoneInfo(config.display_timezone)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("Asia/Kolkata")


def _group_indian(digits: str) -> str:
    """Group an integer digit string the Indian way: 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_currency(amount: Any) -> str:
    """Format an amount as Indian rupees.
    
    Whole amounts get no decimals, fractional ones at most two
    (``₹1,00,000``, ``₹1,234.5``). Unparsable input renders as ``₹0``.
    """
    number = coerce_amount(amount)
    negative = number < 0
    text = f"{abs(number):.2f}".rstrip("0").rstrip(".")
    whole, _, fraction = text.partition(".")
    
    result = CURRENCY_SYMBOL + _group_indian(whole)
    if fraction:
        result += "." + fraction
    if negative and result != CURRENCY_SYMBOL + "0":
        result = "-" + result
    return result


def _localize(value: Any) -> Optional[datetime]:
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.astimezone(_display_zone())


def _clock(dt: datetime) -> str:
    hour = dt.hour % 12 or 12
    meridiem = "am" if dt.hour < 12 else "pm"
    return f"{hour:02d}:{dt.minute:02d} {meridiem}"


def format_date(value: Any) -> str:
    """Date and time, e.g. ``15 Jan 2024, 05:30 pm``."""
    dt = _localize(value)
    if dt is None:
        return ""
    return f"{dt.day:02d} {_MONTHS[dt.month - 1]} {dt.year}, {_clock(dt)}"


def format_date_only(value: Any) -> str:
    """Date only, e.g. ``15 Jan 2024``."""
    dt = _localize(value)
    if dt is None:
        return ""
    return f"{dt.day:02d} {_MONTHS[dt.month - 1]} {dt.year}"


def format_time(value: Any) -> str:
    """Time only, e.g. ``05:30 pm``."""
    dt = _localize(value)
    if dt is None:
        return ""
    return _clock(dt)


def format_date_time(value: Any) -> dict:
    """Short date and time as separate strings for two-line table cells."""
    dt = _localize(value)
    if dt is None:
        return {"date": "", "time": ""}
    return {"date": f"{dt.day:02d} {_MONTHS[dt.month - 1]}", "time": _clock(dt)}


def format_breakdown(breakdown) -> str:
    """Chip badges as text, e.g. ``₹100 × 2, ₹5K × 1``."""
    parts = [f"{d.label} × {count}" for d, count in breakdown.items()]
    return ", ".join(parts) if parts else "—"
