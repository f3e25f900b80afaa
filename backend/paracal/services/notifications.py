# backend/paracal/services/notifications.py
"""
Webhook notifications for upcoming leave.

Payloads are plain chat-ops messages:

    {"title": "...", "text": "markdown body"}

which Slack, Discord, Teams incoming webhooks and generic HTTP receivers all accept.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence
from urllib.parse import urlparse

import httpx

from paracal.config import get_settings
from paracal.models.leave_event import LeaveEvent

logger = logging.getLogger(__name__)

LEAVE_TYPE_LABELS = {
    "vacation": "Vacation",
    "personal": "Personal leave",
    "sick": "Sick leave",
    "absent": "Absent",
    "maternity": "Maternity leave",
    "bereavement": "Bereavement leave",
    "study": "Study leave",
    "military": "Military leave",
    "sabbatical": "Sabbatical",
    "unpaid": "Unpaid leave",
    "compensatory": "Compensatory leave",
    "other": "Other",
}

TRUSTED_WEBHOOK_HOSTS = (
    "hooks.slack.com",
    "outlook.office.com",
    "hooks.teams.microsoft.com",
    "discord.com",
    "discordapp.com",
    "hooks.zapier.com",
    "logic.azure.com",
    "httpbin.org",
)

# A 200 whose body looks like a web page means the URL is not a webhook receiver
_INVALID_MARKERS = (
    "<html", "<!doctype", "<head>", "<body>", "<title>",
    "google", "search", "javascript", "<script", "<style",
)
_VALID_MARKERS = (
    "success", "accepted", "received", "ok", "webhook",
    "notification", "message sent", "delivered",
)

UNNAMED = "(no name)"


# ---- formatting ----------------------------------------------------------------

def leave_type_label(leave_type: Optional[str]) -> str:
    key = leave_type or "other"
    return LEAVE_TYPE_LABELS.get(key, key)


def format_day(d: date) -> str:
    return d.strftime("%A, %d %B %Y")


def _event_line(ev: LeaveEvent) -> str:
    name = ev.employee_name or UNNAMED
    desc = (ev.description or "").strip()
    return f"  - {name} - *{desc}*" if desc else f"  - {name}"


def _group_by_type(events: Iterable[LeaveEvent]) -> dict[str, list[LeaveEvent]]:
    groups: dict[str, list[LeaveEvent]] = {}
    for ev in events:
        groups.setdefault(leave_type_label(ev.leave_type), []).append(ev)
    return groups


def _list_by_type(events: Sequence[LeaveEvent]) -> list[str]:
    lines = []
    for label, group in _group_by_type(events).items():
        lines.append(f"- **{label}** ({len(group)}):")
        lines.extend(_event_line(ev) for ev in group)
    return lines


def _list_by_date(events: Sequence[LeaveEvent]) -> list[str]:
    by_day: dict[date, list[LeaveEvent]] = {}
    for ev in events:
        day = ev.start_date or ev.date
        if day is None:
            continue
        by_day.setdefault(day, []).append(ev)

    lines = []
    for day in sorted(by_day):
        day_events = by_day[day]
        lines.append(f"**{format_day(day)}** ({len(day_events)} events):")
        lines.extend(_list_by_type(day_events))
    return lines


def day_label(notification_days: int) -> str:
    if notification_days == 0:
        return "today"
    if notification_days == 1:
        return "tomorrow"
    if notification_days == 7:
        return "in one week"
    return f"in {notification_days} days"


def _message(header: str, summary: str, body: list[str], custom_message: Optional[str]) -> dict:
    settings = get_settings()
    lines = []
    if custom_message:
        lines.append(f"📢 {custom_message}")
    lines.append(f"**{header}**")
    lines.append(summary)
    if body:
        lines.append("")
        lines.extend(body)
    lines.append("")
    lines.append(f"[Open {settings.APP_NAME}]({settings.APP_URL}/)")
    return {"title": f"{settings.APP_NAME}: {header}", "text": "\n".join(lines)}


def build_daily_message(
    events: Sequence[LeaveEvent],
    notification_date: date,
    notification_days: int,
    custom_message: Optional[str] = None,
) -> dict:
    label = day_label(notification_days)
    header = f"Calendar reminder - {label}"
    when = format_day(notification_date)
    if not events:
        return _message(header, f"{when} | No events {label}", [], custom_message)
    return _message(header, f"**{when}** | **{len(events)} events**", _list_by_type(events), custom_message)


def build_weekly_message(
    events: Sequence[LeaveEvent],
    start: date,
    end: date,
    scope: str,
    custom_message: Optional[str] = None,
) -> dict:
    scope_text = "this week" if scope == "current" else "next week"
    header = f"Calendar reminder - {scope_text}"
    span = f"{format_day(start)} - {format_day(end)}"
    if not events:
        return _message(header, f"{span} | No events {scope_text}", [], custom_message)
    return _message(header, f"**{span}** | **{len(events)} events**", _list_by_date(events), custom_message)


# ---- delivery ------------------------------------------------------------------

def is_valid_webhook_response(url: str, body: str, status: int) -> bool:
    host = urlparse(url).hostname or ""
    if any(trusted in host for trusted in TRUSTED_WEBHOOK_HOSTS):
        return True
    if status != 200:
        return False

    lower = body.lower()
    if any(marker in lower for marker in _INVALID_MARKERS):
        return False
    if any(marker in lower for marker in _VALID_MARKERS):
        return True
    return len(body) < 100 and "<" not in lower


def send_notification(url: str, payload: dict, client: Optional[httpx.Client] = None) -> dict:
    """
    POST the payload as JSON. Never raises; returns {"success": bool, "error"?: str}.
    """
    logger.debug("[notifications] Sending notification to %s", url)
    try:
        if client is not None:
            resp = client.post(url, json=payload)
        else:
            with httpx.Client(timeout=get_settings().WEBHOOK_TIMEOUT_SECONDS) as c:
                resp = c.post(url, json=payload)
    except httpx.HTTPError as e:
        logger.error("[notifications] Error sending notification to %s: %s", url, e)
        return {"success": False, "error": f"Network error: {e}"}

    if resp.status_code == 405:
        return {"success": False, "error": f"Method not allowed: {url} (405)"}
    if resp.status_code == 404:
        return {"success": False, "error": f"Not found: {url} (404)"}
    if resp.status_code >= 400:
        logger.error("[notifications] Webhook %s answered %s", url, resp.status_code)
        return {"success": False, "error": f"Webhook failed with status {resp.status_code}: {resp.text}"}

    if not is_valid_webhook_response(url, resp.text, resp.status_code):
        error = (
            f"Invalid webhook endpoint: {url} does not appear to be a valid webhook. "
            f"Response: {resp.text[:200]}"
        )
        logger.error("[notifications] %s", error)
        return {"success": False, "error": error}

    return {"success": True}
