from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local(tz_name: str) -> datetime:
    """Current wall-clock time in ``tz_name``, returned naive.

    Note: Wrapped so tests can patch/mocked easier. Attendance timestamps are
    stored as local DATETIME values, so the tzinfo is dropped.
    """
    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date from start to end, both included."""
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)


def month_bounds(day: date) -> tuple[date, date]:
    first = day.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    return first, next_month - timedelta(days=1)


def minute_of_day(value: datetime | time) -> int:
    return value.hour * 60 + value.minute


def format_time_of_day(value: Optional[datetime], placeholder: str) -> str:
    if value is None:
        return placeholder
    return value.strftime("%H:%M")
