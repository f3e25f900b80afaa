# backend/paracal/schemas/cronjob.py
from __future__ import annotations
import re
from datetime import datetime
from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

NotificationType = Literal["daily", "weekly"]
WeeklyScope = Literal["current", "next"]

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _check_time(v: Optional[str]) -> Optional[str]:
    if v is not None and not _HHMM.match(v):
        raise ValueError("schedule_time must be HH:MM (24h)")
    return v


def _check_days(v: Optional[List[int]]) -> Optional[List[int]]:
    if v is None:
        return v
    out, seen = [], set()
    for d in v:
        if d < 0 or d > 6:
            raise ValueError("weekly_days values must be 0 (Sunday) .. 6 (Saturday)")
        if d not in seen:
            seen.add(d); out.append(d)
    return out


class CronjobCreate(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    enabled: bool = True
    schedule_time: str
    webhook_url: str = Field(min_length=1)
    notification_days: int = Field(default=1, ge=0)
    notification_type: NotificationType = "daily"
    weekly_days: Optional[List[int]] = None
    weekly_scope: WeeklyScope = "current"

    @field_validator("schedule_time")
    @classmethod
    def _valid_time(cls, v):
        return _check_time(v)

    @field_validator("weekly_days")
    @classmethod
    def _valid_days(cls, v):
        return _check_days(v)


class CronjobUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    enabled: Optional[bool] = None
    schedule_time: Optional[str] = None
    webhook_url: Optional[str] = Field(default=None, min_length=1)
    notification_days: Optional[int] = Field(default=None, ge=0)
    notification_type: Optional[NotificationType] = None
    weekly_days: Optional[List[int]] = None
    weekly_scope: Optional[WeeklyScope] = None

    @field_validator("schedule_time")
    @classmethod
    def _valid_time(cls, v):
        return _check_time(v)

    @field_validator("weekly_days")
    @classmethod
    def _valid_days(cls, v):
        return _check_days(v)


class CronjobOut(BaseModel):
    id: int
    name: str
    enabled: bool
    schedule_time: str
    webhook_url: str
    notification_days: int
    notification_type: NotificationType
    weekly_days: Optional[List[int]] = None
    weekly_scope: WeeklyScope = "current"
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CronjobTestRequest(BaseModel):
    custom_message: Optional[str] = Field(default=None, alias="customMessage")

    model_config = ConfigDict(populate_by_name=True)


class ApiResponse(BaseModel):
    success: bool
    data: Optional[Any] = None
    message: Optional[str] = None
    error: Optional[str] = None
