"""Date helpers for event records."""
from __future__ import annotations

from datetime import date, datetime


def parse_event_date(value: str | None) -> date | None:
    """Return the calendar date stored in an event's ``date`` field.

    Parameters
    ----------
    value:
        Usually ``YYYY-MM-DD``. Full ISO datetimes (``YYYY-MM-DDTHH:MM:SS``,
        with or without offset) are accepted too; only their calendar date
        is kept and no time-zone conversion is applied.

    Returns ``None`` when ``value`` is empty or not an ISO date.
    """
    if not value or not isinstance(value, str):
        return None

    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def human_readable_date(value: date) -> str:
    """Format a date as ``May 12, 2021``."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def month_title(year: int, month: int) -> str:
    """Format a year/month pair as ``May 2021``."""
    return f"{date(year, month, 1).strftime('%B')} {year}"
