"""Shared helpers (logging, display formatting)."""
from .formatters import (
    format_currency,
    format_date,
    format_date_only,
    format_time,
    format_date_time,
)
from .logger import get_logger, set_level

__all__ = [
    "format_currency",
    "format_date",
    "format_date_only",
    "format_time",
    "format_date_time",
    "get_logger",
    "set_level",
]
