# backend/paracal/schemas/event.py
import datetime as dt
from datetime import datetime
from typing import Optional

from .common import CamelModel, LeaveType


class EventCreate(CamelModel):
    employee_id: int
    leave_type: LeaveType
    start_date: dt.date
    end_date: dt.date
    description: Optional[str] = None


class EventUpdate(CamelModel):
    employee_id: Optional[int] = None
    leave_type: Optional[LeaveType] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    description: Optional[str] = None


class EventOut(CamelModel):
    id: int
    employee_id: int
    employee_name: str
    leave_type: str
    date: Optional[dt.date] = None  # legacy: only set for single-day events
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
