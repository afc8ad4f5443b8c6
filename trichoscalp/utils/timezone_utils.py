"""
Centralized timezone utilities for consistent datetime handling across the application.

All timestamps are handled in UTC with timezone awareness. Evaluation dates
may arrive as ``date``, ``datetime`` or ISO-8601 strings (the storage layer
returns strings); ``to_utc_datetime`` normalizes all three.
"""

import math
from datetime import date, datetime, time, timezone
from typing import Optional, Union
import logging

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]

SECONDS_PER_DAY = 60 * 60 * 24


def utc_now() -> datetime:
    """
    Get current UTC time with timezone awareness.

    Returns:
        datetime: Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure a datetime object is in UTC timezone.

    Args:
        dt: Datetime object (can be naive or timezone-aware)

    Returns:
        datetime: UTC datetime with timezone info, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume it's already UTC and add timezone info
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_iso_utc(dt: Optional[datetime]) -> Optional[str]:
    """Format datetime as ISO string in UTC with a 'Z' suffix."""
    if dt is None:
        return None

    utc_dt = ensure_utc(dt)
    return utc_dt.isoformat().replace("+00:00", "Z")


def parse_iso_to_utc(iso_string: str) -> datetime:
    """
    Parse ISO datetime string to UTC datetime object.

    Raises:
        ValueError: If the string cannot be parsed
    """
    try:
        if iso_string.endswith("Z"):
            iso_string = iso_string[:-1] + "+00:00"

        dt = datetime.fromisoformat(iso_string)
        return ensure_utc(dt)
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to parse ISO datetime string '{iso_string}': {e}")
        raise ValueError(f"Invalid ISO datetime string: {iso_string}")


def to_utc_datetime(value: DateLike) -> datetime:
    """Normalize a date, datetime or ISO string into an aware UTC datetime."""
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        return parse_iso_to_utc(value)
    raise TypeError(f"Unsupported date value: {value!r}")


def days_between(first: DateLike, second: DateLike) -> int:
    """
    Absolute difference between two moments in whole days, rounded up.

    Args:
        first: Date, datetime or ISO string
        second: Date, datetime or ISO string

    Returns:
        int: Number of days, never negative
    """
    delta = to_utc_datetime(first) - to_utc_datetime(second)
    return math.ceil(abs(delta.total_seconds()) / SECONDS_PER_DAY)
