# backend/paracal/routers/events.py
from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from paracal.config import get_settings
from paracal.db import get_db
from paracal.models.leave_event import LeaveEvent
from paracal.schemas.event import EventCreate, EventUpdate, EventOut
from paracal.services import events as event_store
from paracal.services.events import effective_start
from paracal.services.calendar import month_bounds, today_in, year_bounds


router = APIRouter(prefix="/events", tags=["events"])
logger = logging.getLogger(__name__)


# ---- Collection queries ------------------------------------------------------
# Fixed paths are declared before "/{event_id}" so they are matched first.

@router.get("", response_model=List[EventOut])
def list_events(db: Session = Depends(get_db)):
    q = select(LeaveEvent).order_by(effective_start.desc(), LeaveEvent.id.desc())
    return db.execute(q).scalars().all()


@router.get("/date/{day}", response_model=List[EventOut])
def events_on_date(day: date, db: Session = Depends(get_db)):
    """
    GET /events/date/2025-06-02
    Single-day events on that day plus multi-day events spanning it.
    """
    return event_store.events_on(db, day)


@router.get("/date-range/{start_date}/{end_date}", response_model=List[EventOut])
def events_in_range(start_date: date, end_date: date, db: Session = Depends(get_db)):
    if end_date < start_date:
        raise HTTPException(status_code=400, detail="end_date must be on/after start_date")
    return event_store.events_between(db, start_date, end_date)


@router.get("/employee/{employee_id}", response_model=List[EventOut])
def events_for_employee(employee_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    q = (
        select(LeaveEvent)
        .where(LeaveEvent.employee_id == employee_id)
        .order_by(effective_start.desc(), LeaveEvent.id)
    )
    return db.execute(q).scalars().all()


@router.get("/employee", response_model=List[EventOut])
def events_for_employee_name(
    employee_name: str = Query(..., alias="employeeName", min_length=1),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    """
    GET /events/employee?employeeName=John%20Smith&startDate=2025-06-01&endDate=2025-06-30
    The range applies only when both bounds are given.
    """
    rows = event_store.events_for_employee_name(db, employee_name, start_date, end_date)
    logger.debug("[events] %d events for employee %r", len(rows), employee_name)
    return rows


@router.get("/leave-type/{leave_type}", response_model=List[EventOut])
def events_by_leave_type(leave_type: str, db: Session = Depends(get_db)):
    q = (
        select(LeaveEvent)
        .where(LeaveEvent.leave_type == leave_type)
        .order_by(effective_start.desc(), LeaveEvent.id)
    )
    return db.execute(q).scalars().all()


@router.get("/month/{year}/{month}", response_model=List[EventOut])
def events_by_month(
    year: int = Path(..., ge=1900, le=2100),
    month: int = Path(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    start, end = month_bounds(year, month)
    return event_store.events_between(db, start, end)


@router.get("/search/{query}", response_model=List[EventOut])
def search_events(query: str, db: Session = Depends(get_db)):
    return event_store.search_events(db, query)


@router.get("/upcoming", response_model=List[EventOut])
@router.get("/upcoming/{days}", response_model=List[EventOut])
def upcoming_events(days: int = 30, db: Session = Depends(get_db)):
    if days < 0:
        raise HTTPException(status_code=400, detail="days must be >= 0")
    today = today_in(get_settings().APP_TZ)
    return event_store.events_between(db, today, today + timedelta(days=days))


@router.get("/stats/overview")
def stats_overview(db: Session = Depends(get_db)):
    return event_store.event_stats(db)


# ---- Bulk deletes --------------------------------------------------------------

@router.delete("/bulk/month/{year}/{month}")
def delete_events_by_month(
    year: int = Path(..., ge=1900, le=2100),
    month: int = Path(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    """
    DELETE /events/bulk/month/2025/6
    Removes events touching the month, including spans that cross its edges.
    """
    start, end = month_bounds(year, month)
    n = event_store.delete_events_between(db, start, end)
    logger.info("[events] Bulk deleted %d events for month %d/%d", n, month, year)
    return {"deletedCount": n}


@router.delete("/bulk/year/{year}")
def delete_events_by_year(year: int = Path(..., ge=1900, le=2100), db: Session = Depends(get_db)):
    start, end = year_bounds(year)
    n = event_store.delete_events_between(db, start, end)
    logger.info("[events] Bulk deleted %d events for year %d", n, year)
    return {"deletedCount": n}


@router.delete("/bulk/all")
def delete_all_events(db: Session = Depends(get_db)):
    n = event_store.delete_all_events(db)
    logger.warning("[events] Bulk deleted all %d events", n)
    return {"deletedCount": n}


# ---- Single event --------------------------------------------------------------

@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    ev = db.get(LeaveEvent, event_id)
    if not ev:
        logger.warning("[events] Event not found with ID: %s", event_id)
        raise HTTPException(status_code=404, detail="Event not found")
    return ev


@router.post("", status_code=201, response_model=EventOut)
def create_event(payload: EventCreate, db: Session = Depends(get_db)):
    """
    POST /events
    Body: { "employeeId": 1, "leaveType": "sick", "startDate": "YYYY-MM-DD", "endDate": "YYYY-MM-DD" }
    """
    ev = event_store.create_event(
        db,
        employee_id=payload.employee_id,
        leave_type=payload.leave_type,
        start_date=payload.start_date,
        end_date=payload.end_date,
        description=payload.description,
    )
    logger.info(
        "[events] Created event: %s - %s from %s to %s",
        ev.employee_name, ev.leave_type, ev.start_date, ev.end_date,
    )
    return ev


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    payload: EventUpdate,
    event_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    ev = event_store.update_event(db, event_id, payload.model_dump(exclude_unset=True))
    if not ev:
        logger.warning("[events] Event not found for update with ID: %s", event_id)
        raise HTTPException(status_code=404, detail="Event not found")
    logger.info("[events] Updated event %s: %s - %s", event_id, ev.employee_name, ev.leave_type)
    return ev


@router.delete("/{event_id}")
def delete_event(event_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    res = db.execute(delete(LeaveEvent).where(LeaveEvent.id == event_id))
    if res.rowcount == 0:
        logger.warning("[events] Event not found for deletion with ID: %s", event_id)
        raise HTTPException(status_code=404, detail="Event not found")
    db.commit()
    logger.info("[events] Deleted event with ID: %s", event_id)
    return {"success": True}
