# backend/paracal/models/cronjob_config.py
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Integer, Boolean, DateTime, JSON, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from paracal.db import Base

class CronjobConfig(Base):
    __tablename__ = "cronjob_config"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    schedule_time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM
    webhook_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    notification_days: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    notification_type: Mapped[str] = mapped_column(String(16), default="daily", nullable=False)
    weekly_days: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)  # 0=Sunday .. 6=Saturday
    weekly_scope: Mapped[str] = mapped_column(String(16), default="current", nullable=False)
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
        CheckConstraint("notification_type IN ('daily', 'weekly')", name="ck_cronjob_notification_type"),
        CheckConstraint("weekly_scope IN ('current', 'next')", name="ck_cronjob_weekly_scope"),
    )
