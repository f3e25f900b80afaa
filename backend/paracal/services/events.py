# backend/paracal/services/events.py
"""Event-store queries shared by the events router and the notification scheduler."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Sequence

from sqlalchemy import String, and_, cast, delete, func, or_, select
from sqlalchemy.orm import Session

from paracal.errors import InvalidRangeError, UnknownReferenceError
from paracal.models.employee import Employee
from paracal.models.leave_event import LeaveEvent

effective_start = func.coalesce(LeaveEvent.start_date, LeaveEvent.date)


def in_range_clause(start: date, end: date):
    """Legacy date inside [start, end], or the [start_date, end_date] span overlapping it."""
    return or_(
        and_(LeaveEvent.date >= start, LeaveEvent.date <= end),
        and_(LeaveEvent.start_date <= end, LeaveEvent.end_date >= start),
    )


def events_on(db: Session, day: date) -> Sequence[LeaveEvent]:
    q = (
        select(LeaveEvent)
        .where(
            or_(
                LeaveEvent.date == day,
                and_(LeaveEvent.start_date <= day, LeaveEvent.end_date >= day),
            )
        )
        .order_by(LeaveEvent.employee_name.asc(), LeaveEvent.id)
    )
    return db.execute(q).scalars().all()


def events_between(db: Session, start: date, end: date) -> Sequence[LeaveEvent]:
    q = (
        select(LeaveEvent)
        .where(in_range_clause(start, end))
        .order_by(effective_start.asc(), LeaveEvent.employee_name.asc(), LeaveEvent.id)
    )
    return db.execute(q).scalars().all()


def events_for_employee_name(
    db: Session, employee_name: str, start: Optional[date] = None, end: Optional[date] = None
) -> Sequence[LeaveEvent]:
    q = select(LeaveEvent).where(LeaveEvent.employee_name == employee_name)
    if start is not None and end is not None:
        q = q.where(in_range_clause(start, end))
    return db.execute(q.order_by(effective_start.desc(), LeaveEvent.id)).scalars().all()


def search_events(db: Session, term: str) -> Sequence[LeaveEvent]:
    like = f"%{term}%"
    q = (
        select(LeaveEvent)
        .where(or_(LeaveEvent.employee_name.like(like), LeaveEvent.description.like(like)))
        .order_by(effective_start.desc(), LeaveEvent.id)
    )
    return db.execute(q).scalars().all()


def event_stats(db: Session) -> dict:
    total = db.execute(select(func.count()).select_from(LeaveEvent)).scalar_one()

    count = func.count().label("count")
    by_type = db.execute(
        select(LeaveEvent.leave_type, count)
        .group_by(LeaveEvent.leave_type)
        .order_by(count.desc(), LeaveEvent.leave_type)
    ).all()

    # YYYY-MM of the effective start; dates are ISO strings in SQLite and DATEs elsewhere
    month = func.substr(cast(effective_start, String), 1, 7).label("month")
    by_month = db.execute(
        select(month, func.count().label("count")).group_by(month).order_by(month.desc()).limit(12)
    ).all()

    return {
        "total": total,
        "byLeaveType": [{"leave_type": r.leave_type, "count": r.count} for r in by_type],
        "byMonth": [{"month": r.month, "count": r.count} for r in by_month],
    }


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _employee_or_error(db: Session, employee_id: int) -> Employee:
    emp = db.get(Employee, employee_id)
    if emp is None:
        raise UnknownReferenceError("unknown_employee", f"Employee with id {employee_id} not found")
    return emp


def create_event(
    db: Session,
    employee_id: int,
    leave_type: str,
    start_date: date,
    end_date: date,
    description: Optional[str] = None,
) -> LeaveEvent:
    if end_date < start_date:
        raise InvalidRangeError("invalid_range", "endDate must be on/after startDate")
    emp = _employee_or_error(db, employee_id)

    ev = LeaveEvent(
        employee_id=emp.id,
        employee_name=emp.name,
        leave_type=leave_type,
        start_date=start_date,
        end_date=end_date,
        date=LeaveEvent.legacy_date_for(start_date, end_date),
        description=description or None,
    )
    db.add(ev)
    db.commit()
    db.refresh(ev)
    return ev


def update_event(db: Session, event_id: int, changes: dict) -> Optional[LeaveEvent]:
    """
    Apply a partial update. The stored employee_name is refreshed only when the
    event moves to a different employee.
    """
    ev = db.get(LeaveEvent, event_id)
    if ev is None:
        return None

    new_employee_id = changes.get("employee_id")
    if new_employee_id is not None and new_employee_id != ev.employee_id:
        emp = _employee_or_error(db, new_employee_id)
        ev.employee_id = emp.id
        ev.employee_name = emp.name

    start = changes.get("start_date") or ev.effective_start
    end = changes.get("end_date") or ev.effective_end
    if start and end and end < start:
        raise InvalidRangeError("invalid_range", "endDate must be on/after startDate")
    ev.start_date = start
    ev.end_date = end
    ev.date = LeaveEvent.legacy_date_for(start, end) if start and end else ev.date

    if changes.get("leave_type") is not None:
        ev.leave_type = changes["leave_type"]
    if "description" in changes:
        ev.description = changes["description"] or None

    ev.updated_at = _now()
    db.commit()
    db.refresh(ev)
    return ev


def delete_events_between(db: Session, start: date, end: date) -> int:
    """Delete every event whose legacy date or span touches [start, end]; returns the count."""
    res = db.execute(
        delete(LeaveEvent)
        .where(in_range_clause(start, end))
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return res.rowcount


def delete_all_events(db: Session) -> int:
    res = db.execute(delete(LeaveEvent).execution_options(synchronize_session=False))
    db.commit()
    return res.rowcount
