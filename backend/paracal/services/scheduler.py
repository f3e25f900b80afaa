# backend/paracal/services/scheduler.py
"""
Scheduled webhook notifications.

`CronjobService` owns the cronjob_config rows and decides, once a minute, which of
them fire. All "now"-dependent methods take an optional timezone-aware `now` so
they can be driven deterministically; by default it is the wall clock in APP_TZ.

    daily   -> events on today + notification_days; nothing is sent for an empty day
    weekly  -> only on configured weekdays (0=Sunday); events overlapping the
               current or next Sunday-to-Saturday week
"""
from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Sequence

import httpx
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from paracal.config import get_settings
from paracal.errors import ConflictError, NotFoundError
from paracal.models.company_holiday import CompanyHoliday
from paracal.models.cronjob_config import CronjobConfig
from paracal.services import notifications
from paracal.services.calendar import is_business_day, now_in, sunday_based_weekday, week_bounds
from paracal.services.events import events_between, events_on

logger = logging.getLogger(__name__)

_EDITABLE = (
    "name", "enabled", "schedule_time", "webhook_url",
    "notification_days", "notification_type", "weekly_days", "weekly_scope",
)


class CronjobService:
    def __init__(self, session_factory: Callable[[], Session], client: Optional[httpx.Client] = None):
        self.session_factory = session_factory
        self.client = client
        # config id -> "YYYY-MM-DD HH:MM" of the last scheduled run
        self.last_executions: dict[int, str] = {}

    # ---- config CRUD -------------------------------------------------------------

    def list_configs(self) -> Sequence[CronjobConfig]:
        with self.session_factory() as s:
            q = select(CronjobConfig).order_by(CronjobConfig.schedule_time, CronjobConfig.id)
            return s.execute(q).scalars().all()

    def enabled_configs(self) -> Sequence[CronjobConfig]:
        with self.session_factory() as s:
            q = (
                select(CronjobConfig)
                .where(CronjobConfig.enabled.is_(True))
                .order_by(CronjobConfig.schedule_time, CronjobConfig.id)
            )
            return s.execute(q).scalars().all()

    def get_config(self, config_id: int) -> Optional[CronjobConfig]:
        with self.session_factory() as s:
            return s.get(CronjobConfig, config_id)

    def create_config(self, data: dict) -> CronjobConfig:
        with self.session_factory() as s:
            cfg = CronjobConfig(**{k: v for k, v in data.items() if k in _EDITABLE})
            s.add(cfg)
            self._commit(s, cfg.name)
            s.refresh(cfg)
            return cfg

    def update_config(self, config_id: int, changes: dict) -> CronjobConfig:
        with self.session_factory() as s:
            cfg = s.get(CronjobConfig, config_id)
            if cfg is None:
                raise NotFoundError("cronjob_not_found", f"Cronjob configuration {config_id} not found")
            for key, value in changes.items():
                if key in _EDITABLE:
                    setattr(cfg, key, value)
            self._commit(s, cfg.name)
            s.refresh(cfg)
            return cfg

    def delete_config(self, config_id: int) -> None:
        with self.session_factory() as s:
            res = s.execute(delete(CronjobConfig).where(CronjobConfig.id == config_id))
            if res.rowcount == 0:
                raise NotFoundError("cronjob_not_found", f"Cronjob configuration {config_id} not found")
            s.commit()
        self.last_executions.pop(config_id, None)

    @staticmethod
    def _commit(s: Session, name: str) -> None:
        try:
            s.commit()
        except IntegrityError as e:
            s.rollback()
            raise ConflictError("duplicate_name", f"Cronjob configuration named {name!r} already exists") from e

    # ---- dispatch ------------------------------------------------------------------

    def _now(self, now: Optional[datetime]) -> datetime:
        return now or now_in(get_settings().APP_TZ)

    def _daily_payload(self, s: Session, cfg: CronjobConfig, today: date, custom_message=None):
        target = today + timedelta(days=cfg.notification_days)
        events = events_on(s, target)
        logger.debug("[scheduler] %d events for %s", len(events), target)
        return events, notifications.build_daily_message(
            events, target, cfg.notification_days, custom_message
        )

    def _weekly_payload(self, s: Session, cfg: CronjobConfig, today: date, custom_message=None):
        scope = cfg.weekly_scope or "current"
        start, end = week_bounds(today, scope)
        events = events_between(s, start, end)
        logger.debug("[scheduler] %d events for %s week (%s to %s)", len(events), scope, start, end)
        return events, notifications.build_weekly_message(events, start, end, scope, custom_message)

    def execute_notification(self, cfg: CronjobConfig, now: Optional[datetime] = None) -> dict:
        now = self._now(now)
        today = now.date()
        logger.info("[scheduler] Executing cronjob %s at %s", cfg.name, now.isoformat())

        with self.session_factory() as s:
            if cfg.notification_type == "weekly":
                if not cfg.weekly_days or sunday_based_weekday(today) not in cfg.weekly_days:
                    logger.debug("[scheduler] %s is not a notification day for %s", today, cfg.name)
                    return {"success": True}
                events, payload = self._weekly_payload(s, cfg, today)
            else:
                events, payload = self._daily_payload(s, cfg, today)
                if not events:
                    logger.debug("[scheduler] No events for %s, nothing sent", cfg.name)
                    return {"success": True}

        result = notifications.send_notification(cfg.webhook_url, payload, client=self.client)
        logger.info(
            "[scheduler] %s notification for %s: %s",
            cfg.notification_type, cfg.name, "success" if result["success"] else "failed",
        )
        return result

    def test_notification(
        self, config_id: int, custom_message: Optional[str] = None, now: Optional[datetime] = None
    ) -> dict:
        """Send the config's message right away, even for an empty day or week."""
        cfg = self.get_config(config_id)
        if cfg is None:
            return {"success": False, "error": f"Cronjob configuration {config_id} not found"}

        today = self._now(now).date()
        with self.session_factory() as s:
            if cfg.notification_type == "weekly":
                _, payload = self._weekly_payload(s, cfg, today, custom_message)
            else:
                _, payload = self._daily_payload(s, cfg, today, custom_message)

        logger.info("[scheduler] Testing notification for cronjob %s", cfg.name)
        return notifications.send_notification(cfg.webhook_url, payload, client=self.client)

    def should_skip(self, day: date) -> bool:
        with self.session_factory() as s:
            holiday = s.execute(
                select(CompanyHoliday.id).where(CompanyHoliday.date == day).limit(1)
            ).first()
        return not is_business_day(day, {day} if holiday else ())

    def check_and_execute_scheduled(self, now: Optional[datetime] = None) -> list[int]:
        """
        One scheduler tick. Returns the ids of the configs that fired.
        """
        now = self._now(now)
        today = now.date()
        hhmm = now.strftime("%H:%M")
        key = f"{today.isoformat()} {hhmm}"

        if self.should_skip(today):
            logger.debug("[scheduler] Skipping %s (weekend or company holiday)", today)
            return []

        due = [
            cfg for cfg in self.enabled_configs()
            if cfg.schedule_time == hhmm and self.last_executions.get(cfg.id) != key
        ]
        if not due:
            return []

        logger.info("[scheduler] %d scheduled notifications for %s", len(due), hhmm)
        fired = []
        for cfg in due:
            self.execute_notification(cfg, now)
            self.last_executions[cfg.id] = key
            fired.append(cfg.id)
        return fired


async def run_scheduler(service: CronjobService, interval_seconds: int) -> None:
    """Background loop: one tick per interval, each in a worker thread."""
    logger.info("[scheduler] Started, checking every %ss", interval_seconds)
    while True:
        try:
            await asyncio.to_thread(service.check_and_execute_scheduled)
        except Exception:
            logger.exception("[scheduler] Scheduler tick failed")
        await asyncio.sleep(interval_seconds)
