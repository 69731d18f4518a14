"""
Date helpers.

Everything here works at calendar-day (midnight) granularity; times of day
are dropped.  Scheduler and progression code never read the clock: callers
pass ``today``.
"""

import time
from datetime import date, datetime


def parse_date(value: str | date | datetime | None) -> date | None:
    """
    Convert an ISO date, ISO timestamp, date or datetime to a date.

    Only the leading YYYY-MM-DD of a string is read, so
    "2026-03-02T18:45:00.000Z" and "2026-03-02" are the same day.

    Returns:
        The calendar date, or None if the value cannot be read
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def days_between(earlier: date, later: date) -> int:
    """
    Whole days from ``earlier`` to ``later`` (negative if reversed).

    A datetime counts as its calendar date.
    """
    return (parse_date(later) - parse_date(earlier)).days


def today_iso() -> str:
    """Today's date as YYYY-MM-DD."""
    return date.today().isoformat()


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)
