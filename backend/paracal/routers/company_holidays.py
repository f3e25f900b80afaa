# backend/paracal/routers/company_holidays.py
from __future__ import annotations

from datetime import date
from typing import List
import logging

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy import select, delete, and_
from sqlalchemy.orm import Session

from paracal.db import get_db
from paracal.models.company_holiday import CompanyHoliday
from paracal.schemas.company_holiday import (
    CompanyHolidayCreate,
    CompanyHolidayBulkCreate,
    CompanyHolidayUpdate,
    CompanyHolidayOut,
    HolidayCheck,
)
from paracal.services.calendar import year_bounds


router = APIRouter(prefix="/company-holidays", tags=["company-holidays"])
logger = logging.getLogger(__name__)


def _between(s: Session, start: date, end: date):
    q = (
        select(CompanyHoliday)
        .where(and_(CompanyHoliday.date >= start, CompanyHoliday.date <= end))
        .order_by(CompanyHoliday.date, CompanyHoliday.id)
    )
    return s.execute(q).scalars().all()


@router.get("", response_model=List[CompanyHolidayOut])
def list_holidays(db: Session = Depends(get_db)):
    q = select(CompanyHoliday).order_by(CompanyHoliday.date, CompanyHoliday.id)
    return db.execute(q).scalars().all()


@router.get("/range/{start_date}/{end_date}", response_model=List[CompanyHolidayOut])
def holidays_in_range(start_date: date, end_date: date, db: Session = Depends(get_db)):
    if end_date < start_date:
        raise HTTPException(status_code=400, detail="end_date must be on/after start_date")
    return _between(db, start_date, end_date)


@router.get("/check/{day}", response_model=HolidayCheck)
def check_holiday(day: date, db: Session = Depends(get_db)):
    """
    GET /company-holidays/check/2025-12-25 -> { "date": "2025-12-25", "isHoliday": true }
    """
    hit = db.execute(
        select(CompanyHoliday.id).where(CompanyHoliday.date == day).limit(1)
    ).first()
    return {"date": day, "is_holiday": hit is not None}


@router.get("/holiday/{holiday_id}", response_model=CompanyHolidayOut)
def get_holiday(holiday_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    h = db.get(CompanyHoliday, holiday_id)
    if not h:
        raise HTTPException(status_code=404, detail="Company holiday not found")
    return h


@router.get("/{year}", response_model=List[CompanyHolidayOut])
def holidays_for_year(year: int = Path(..., ge=1900, le=2100), db: Session = Depends(get_db)):
    start, end = year_bounds(year)
    return _between(db, start, end)


@router.post("", status_code=201, response_model=CompanyHolidayOut)
def create_holiday(payload: CompanyHolidayCreate, db: Session = Depends(get_db)):
    h = CompanyHoliday(
        name=payload.name.strip(),
        date=payload.date,
        description=payload.description or None,
    )
    db.add(h)
    db.commit()
    db.refresh(h)
    logger.info("[holidays] Created company holiday %s on %s", h.name, h.date)
    return h


@router.post("/bulk", status_code=201, response_model=List[CompanyHolidayOut])
def create_holidays_bulk(payload: CompanyHolidayBulkCreate, db: Session = Depends(get_db)):
    """
    POST /company-holidays/bulk
    Body: { "holidays": [ { "name": "...", "date": "YYYY-MM-DD" }, ... ] }
    All rows are written in one transaction.
    """
    rows = [
        CompanyHoliday(name=h.name.strip(), date=h.date, description=h.description or None)
        for h in payload.holidays
    ]
    db.add_all(rows)
    db.commit()
    for h in rows:
        db.refresh(h)
    logger.info("[holidays] Bulk created %d company holidays", len(rows))
    return rows


@router.put("/{holiday_id}", response_model=CompanyHolidayOut)
def update_holiday(
    payload: CompanyHolidayUpdate,
    holiday_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    h = db.get(CompanyHoliday, holiday_id)
    if not h:
        raise HTTPException(status_code=404, detail="Company holiday not found")

    changes = payload.model_dump(exclude_unset=True)
    if changes.get("name") is not None:
        h.name = changes["name"].strip()
    if changes.get("date") is not None:
        h.date = changes["date"]
    if "description" in changes:
        h.description = changes["description"] or None
    db.commit()
    db.refresh(h)
    return h


@router.delete("/clear-all")
def clear_all_holidays(db: Session = Depends(get_db)):
    res = db.execute(delete(CompanyHoliday))
    db.commit()
    logger.info("[holidays] Cleared %d company holidays", res.rowcount)
    return {"count": res.rowcount}


@router.delete("/{holiday_id}", status_code=204)
def delete_holiday(holiday_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    res = db.execute(delete(CompanyHoliday).where(CompanyHoliday.id == holiday_id))
    if res.rowcount == 0:
        raise HTTPException(status_code=404, detail="Company holiday not found")
    db.commit()
    return
