# backend/paracal/services/calendar.py
"""Calendar-day helpers shared by the dashboard and the notification scheduler.

Everything here is pure: callers pass in the holiday set and "today" so the
results never depend on the wall clock or the database.
"""
from __future__ import annotations

import calendar as _cal
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, Literal, Optional, Protocol
from zoneinfo import ZoneInfo

WeekScope = Literal["current", "next"]

SATURDAY = 5
SUNDAY = 6


class HasDateSpan(Protocol):
    date: Optional[date]
    start_date: Optional[date]
    end_date: Optional[date]


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive."""
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)


def is_business_day(d: date, holidays: Iterable[date] = ()) -> bool:
    if d.weekday() in (SATURDAY, SUNDAY):
        return False
    return d not in holidays


def business_days(start: date, end: date, holidays: Iterable[date] = ()) -> int:
    """
    Count days in [start, end] that are neither Saturday/Sunday nor a company holiday.
    A holiday overrides the weekday; a reversed range counts nothing.
    """
    holiday_set = holidays if isinstance(holidays, (set, frozenset)) else set(holidays)
    return sum(1 for d in iter_days(start, end) if is_business_day(d, holiday_set))


def effective_range(event: HasDateSpan) -> tuple[Optional[date], Optional[date]]:
    """(start_date or date, end_date or date) for an event row."""
    start = event.start_date or event.date
    end = event.end_date or event.date
    return start, end


def overlaps(start: date, end: date, range_start: date, range_end: date) -> bool:
    return start <= range_end and end >= range_start


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last = _cal.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def year_bounds(year: int) -> tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def week_bounds(today: date, scope: WeekScope = "current") -> tuple[date, date]:
    """Sunday-to-Saturday week containing `today`, or the week after it."""
    # date.weekday(): Monday=0 .. Sunday=6
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    if scope == "next":
        start += timedelta(days=7)
    return start, start + timedelta(days=6)


def sunday_based_weekday(d: date) -> int:
    """0=Sunday .. 6=Saturday, the numbering stored in cronjob weekly_days."""
    return (d.weekday() + 1) % 7


def now_in(tz_name: str) -> datetime:
    return datetime.now(ZoneInfo(tz_name))


def today_in(tz_name: str) -> date:
    return now_in(tz_name).date()
