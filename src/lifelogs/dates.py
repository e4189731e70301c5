"""Date helpers for per-day processing."""

from __future__ import annotations

import re
from datetime import date, timedelta

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_HOURS_RE = re.compile(r"(\d+)h")
_MINUTES_RE = re.compile(r"(\d+)m")


def is_valid_date_string(value: str) -> bool:
    """True if *value* is a real calendar date in ``YYYY-MM-DD`` form."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def parse_date(value: str) -> date:
    if not is_valid_date_string(value):
        msg = f"Invalid date {value!r}; expected YYYY-MM-DD"
        raise ValueError(msg)
    return date.fromisoformat(value)


def get_date_range(start_date: str, end_date: str) -> list[str]:
    """Every date from *start_date* to *end_date* inclusive, as ``YYYY-MM-DD``.

    Raises:
        ValueError: If either date is malformed or the start is after the end.
    """
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start > end:
        msg = f"Start date {start_date} cannot be after end date {end_date}"
        raise ValueError(msg)

    return [(start + timedelta(days=offset)).isoformat() for offset in range((end - start).days + 1)]


def parse_duration(value: str) -> int:
    """Minutes in a duration string such as ``"1h 30m"``, ``"45m"`` or ``"2h"``."""
    if not isinstance(value, str):
        return 0
    hours = _HOURS_RE.search(value)
    minutes = _MINUTES_RE.search(value)
    return (int(hours.group(1)) if hours else 0) * 60 + (int(minutes.group(1)) if minutes else 0)


def format_duration(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes}m"
    hours, remainder = divmod(minutes, 60)
    if remainder == 0:
        return f"{hours}h"
    return f"{hours}h {remainder}m"
