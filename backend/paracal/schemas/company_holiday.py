# backend/paracal/schemas/company_holiday.py
import datetime as dt
from datetime import datetime
from typing import List, Optional
from pydantic import Field

from .common import CamelModel


class CompanyHolidayCreate(CamelModel):
    name: str = Field(min_length=1, max_length=128)
    date: dt.date
    description: Optional[str] = None


class CompanyHolidayBulkCreate(CamelModel):
    holidays: List[CompanyHolidayCreate]


class CompanyHolidayUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    date: Optional[dt.date] = None
    description: Optional[str] = None


class CompanyHolidayOut(CamelModel):
    id: int
    name: str
    date: dt.date
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class HolidayCheck(CamelModel):
    date: dt.date
    is_holiday: bool
