# backend/paracal/routers/dashboard.py
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from paracal.db import get_db
from paracal.schemas.dashboard import DashboardSummary
from paracal.services.dashboard import get_dashboard_summary


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def dashboard_summary(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    event_type: Optional[str] = Query(None, alias="eventType"),
    include_future_events: Optional[str] = Query(None, alias="includeFutureEvents"),
    db: Session = Depends(get_db),
):
    """
    GET /dashboard/summary?startDate=2025-06-01&endDate=2025-06-30&eventType=sick
    GET /dashboard/summary?includeFutureEvents=true

    Future events are included only for the literal "true"; "today" is the current date in APP_TZ.
    A lone startDate or endDate is ignored and the summary is not date-filtered.
    """
    return get_dashboard_summary(
        db,
        start_date=start_date,
        end_date=end_date,
        leave_type=event_type,
        include_future_events=include_future_events == "true",
    )
