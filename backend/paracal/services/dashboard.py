# backend/paracal/services/dashboard.py
"""
Dashboard aggregation over leave events.

Given an optional inclusive date range, an optional leave-type filter and the
include-future toggle, produce:

    {
      "monthlyStats": {totalEvents, totalEmployees, totalBusinessDays, mostCommonType},
      "employeeRanking": [{name, totalEvents, totalBusinessDays, eventTypes}, ...]
    }

Events that merely overlap the range are counted in full (never clipped), and
their business days are measured over their own span, so the holiday set is
fetched for the union of the matched events' spans rather than the filter range.
"""
from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from paracal.config import get_settings
from paracal.errors import InvalidRangeError
from paracal.models.company_holiday import CompanyHoliday
from paracal.models.employee import Employee
from paracal.models.leave_event import LeaveEvent
from paracal.services.calendar import business_days, effective_range, today_in
from paracal.services.events import in_range_clause

logger = logging.getLogger(__name__)

ALL_TYPES = "all"
NO_TYPE = "N/A"
UNKNOWN_EMPLOYEE = "Unknown"


def _check_bounds(start_date: Optional[date], end_date: Optional[date]) -> None:
    # a lone bound is ignored (no date filtering); only a reversed pair is rejected
    if start_date is not None and end_date is not None and start_date > end_date:
        raise InvalidRangeError("invalid_range", "endDate must be on/after startDate")


def matching_events(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    leave_type: Optional[str] = None,
    include_future_events: bool = False,
    today: Optional[date] = None,
) -> Sequence[LeaveEvent]:
    """Events passing every active filter (AND-combined)."""
    conditions = []

    if start_date is not None and end_date is not None:
        conditions.append(in_range_clause(start_date, end_date))

    if not include_future_events:
        cutoff = today or today_in(get_settings().APP_TZ)
        conditions.append(func.coalesce(LeaveEvent.start_date, LeaveEvent.date) <= cutoff)

    if leave_type and leave_type != ALL_TYPES:
        conditions.append(LeaveEvent.leave_type == leave_type)

    q = select(LeaveEvent).where(*conditions).order_by(LeaveEvent.id)
    return db.execute(q).scalars().all()


def holidays_covering(db: Session, events: Iterable[LeaveEvent]) -> set[date]:
    """Company holiday dates within the widest span of the given events."""
    starts, ends = [], []
    for e in events:
        s, en = effective_range(e)
        if s and en:
            starts.append(s)
            ends.append(en)
    if not starts:
        return set()

    rows = db.execute(
        select(CompanyHoliday.date).where(
            and_(CompanyHoliday.date >= min(starts), CompanyHoliday.date <= max(ends))
        )
    ).scalars()
    return set(rows)


def summarize(
    events: Iterable[LeaveEvent],
    holiday_dates: set[date],
    fallback_names: Optional[Mapping[int, str]] = None,
) -> dict:
    fallback_names = fallback_names or {}
    type_counts: Counter[str] = Counter()
    employees: dict[int, dict] = {}
    total_events = 0
    total_business_days = 0

    for e in events:
        s, en = effective_range(e)
        days = business_days(s, en, holiday_dates) if s and en else 0

        total_events += 1
        total_business_days += days
        type_counts[e.leave_type] += 1

        acc = employees.get(e.employee_id)
        if acc is None:
            acc = {
                "name": e.employee_name or fallback_names.get(e.employee_id) or UNKNOWN_EMPLOYEE,
                "totalEvents": 0,
                "totalBusinessDays": 0,
                "eventTypes": {},
            }
            employees[e.employee_id] = acc
        acc["totalEvents"] += 1
        acc["totalBusinessDays"] += days
        acc["eventTypes"][e.leave_type] = acc["eventTypes"].get(e.leave_type, 0) + 1

    # highest count wins; ties go to the lexically smallest key
    most_common = (
        min(type_counts.items(), key=lambda kv: (-kv[1], kv[0]))[0] if type_counts else NO_TYPE
    )

    ranking = sorted(
        employees.items(),
        key=lambda kv: (-kv[1]["totalEvents"], kv[1]["name"], kv[0]),
    )

    return {
        "monthlyStats": {
            "totalEvents": total_events,
            "totalEmployees": len(employees),
            "totalBusinessDays": total_business_days,
            "mostCommonType": most_common,
        },
        "employeeRanking": [acc for _, acc in ranking],
    }


def get_dashboard_summary(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    leave_type: Optional[str] = None,
    include_future_events: bool = False,
    today: Optional[date] = None,
) -> dict:
    _check_bounds(start_date, end_date)

    events = matching_events(
        db,
        start_date=start_date,
        end_date=end_date,
        leave_type=leave_type,
        include_future_events=include_future_events,
        today=today,
    )
    holiday_dates = holidays_covering(db, events)

    unnamed = {e.employee_id for e in events if not e.employee_name}
    fallback_names: dict[int, str] = {}
    if unnamed:
        rows = db.execute(select(Employee.id, Employee.name).where(Employee.id.in_(unnamed))).all()
        fallback_names = {r.id: r.name for r in rows}

    logger.debug(
        "[dashboard] %d events matched (range=%s..%s, type=%s, future=%s), %d holidays in span",
        len(events), start_date, end_date, leave_type, include_future_events, len(holiday_dates),
    )
    return summarize(events, holiday_dates, fallback_names)
