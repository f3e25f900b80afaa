# backend/paracal/schemas/employee.py
from datetime import datetime
from typing import Optional
from pydantic import field_validator

from .common import CamelModel


def _clean_name(v: str) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError("name must not be empty")
    return v


class EmployeeCreate(CamelModel):
    name: str

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v):
        return _clean_name(v)


class EmployeeUpdate(CamelModel):
    name: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v):
        return None if v is None else _clean_name(v)


class EmployeeOut(CamelModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime
