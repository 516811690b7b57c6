from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def whole_months_between(start: date, end: date) -> int:
    """Calendar months from start to end, truncated.

    A month only counts once the day-of-month of ``start`` has been reached,
    so 2024-01-31 -> 2024-02-29 is 0 months and 2024-01-15 -> 2024-02-15 is 1.
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if months > 0 and end.day < start.day:
        months -= 1
    elif months < 0 and end.day > start.day:
        months += 1
    return months


def whole_years_between(start: date, end: date) -> int:
    months = whole_months_between(start, end)
    return int(months / 12)
