# backend/paracal/models/leave_event.py
import datetime as dt
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import ForeignKey, String, Text, Date, DateTime, Index, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from paracal.db import Base

# Superset accepted by the store; older rows may carry any of these.
LEAVE_TYPES = (
    "vacation",
    "personal",
    "sick",
    "absent",
    "maternity",
    "bereavement",
    "study",
    "military",
    "sabbatical",
    "unpaid",
    "compensatory",
    "other",
)


class LeaveEvent(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    employee_id: Mapped[int] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Name as it was when the event was recorded; renames do not touch it
    employee_name: Mapped[str] = mapped_column(String(128), nullable=False)
    leave_type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)

    # Legacy single-day field: equals start_date when start_date == end_date, else NULL
    date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True, index=True)
    start_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint(
            "leave_type IN (" + ", ".join(f"'{t}'" for t in LEAVE_TYPES) + ")",
            name="ck_events_leave_type",
        ),
    )

    employee = relationship("Employee")

    @staticmethod
    def legacy_date_for(start: dt.date, end: dt.date) -> Optional[dt.date]:
        return start if start == end else None

    @property
    def effective_start(self) -> Optional[dt.date]:
        return self.start_date or self.date

    @property
    def effective_end(self) -> Optional[dt.date]:
        return self.end_date or self.date

# helpful index for range queries
Index("ix_events_date_range", LeaveEvent.start_date, LeaveEvent.end_date)
