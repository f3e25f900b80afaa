from datetime import date
from types import SimpleNamespace

import httpx
import pytest

from paracal.services.notifications import (
    build_daily_message,
    build_weekly_message,
    day_label,
    is_valid_webhook_response,
    send_notification,
)

GOOGLE_405 = """<!DOCTYPE html>
<html lang=en>
  <meta charset=utf-8>
  <title>Error 405 (Method Not Allowed)!!1</title>
  <p><b>405.</b> <ins>That's an error.</ins>"""


def ev(name, leave_type, start, end=None, description=None):
    end = end or start
    return SimpleNamespace(
        employee_name=name, leave_type=leave_type, description=description,
        start_date=start, end_date=end, date=start if start == end else None,
    )


def client_for(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


# ---- messages ------------------------------------------------------------------

@pytest.mark.parametrize("days,label", [(0, "today"), (1, "tomorrow"), (7, "in one week"), (3, "in 3 days")])
def test_day_label(days, label):
    assert day_label(days) == label


def test_daily_message_groups_by_type():
    msg = build_daily_message(
        [
            ev("John Smith", "sick", date(2025, 6, 3), description="Flu"),
            ev("Sarah Johnson", "vacation", date(2025, 6, 3)),
            ev("Emily Davis", "sick", date(2025, 6, 3)),
        ],
        date(2025, 6, 3),
        1,
    )
    assert set(msg) == {"title", "text"}
    assert "tomorrow" in msg["title"]
    text = msg["text"]
    assert "**3 events**" in text
    assert "- **Sick leave** (2):" in text
    assert "  - John Smith - *Flu*" in text
    assert "  - Emily Davis" in text
    assert "- **Vacation** (1):" in text


def test_daily_message_without_events():
    msg = build_daily_message([], date(2025, 6, 3), 0)
    assert "No events today" in msg["text"]


def test_custom_message_leads():
    msg = build_daily_message([], date(2025, 6, 3), 1, custom_message="Heads up")
    assert msg["text"].splitlines()[0] == "📢 Heads up"


def test_weekly_message_groups_by_date():
    msg = build_weekly_message(
        [
            ev("Sarah Johnson", "vacation", date(2025, 6, 5), date(2025, 6, 6)),
            ev("John Smith", "sick", date(2025, 6, 2)),
        ],
        date(2025, 6, 1),
        date(2025, 6, 7),
        "current",
    )
    text = msg["text"]
    assert "this week" in msg["title"]
    monday = text.index("Monday, 02 June 2025")
    thursday = text.index("Thursday, 05 June 2025")
    assert monday < thursday
    assert "**2 events**" in text


def test_weekly_message_next_week_empty():
    msg = build_weekly_message([], date(2025, 6, 8), date(2025, 6, 14), "next")
    assert "No events next week" in msg["text"]


# ---- response validation -------------------------------------------------------

def test_trusted_hosts_always_valid():
    assert is_valid_webhook_response("https://hooks.slack.com/services/x", "<html>", 500)
    assert is_valid_webhook_response("https://acme.webhook.office.com.outlook.office.com/x", "", 202)


@pytest.mark.parametrize("body,status,expected", [
    ("ok", 200, True),
    ('{"status": "accepted"}', 200, True),
    ("1", 200, True),
    ("<html><body>hello</body></html>", 200, False),
    ("Search results for your query", 200, False),
    ("x" * 150, 200, False),
    ("ok", 201, False),
    ("ok", 204, False),
])
def test_generic_hosts(body, status, expected):
    assert is_valid_webhook_response("https://example.com/hook", body, status) is expected


# ---- delivery ------------------------------------------------------------------

def test_send_posts_json():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, text="ok")

    with client_for(handler) as c:
        result = send_notification("https://example.com/hook", {"title": "t", "text": "b"}, client=c)

    assert result == {"success": True}
    assert seen[0].method == "POST"
    assert seen[0].headers["content-type"] == "application/json"


@pytest.mark.parametrize("status,body,expected", [
    (405, GOOGLE_405, "Method not allowed: https://example.com/ (405)"),
    (404, "nope", "Not found: https://example.com/ (404)"),
    (500, "boom", "Webhook failed with status 500: boom"),
])
def test_send_http_errors(status, body, expected):
    with client_for(lambda r: httpx.Response(status, text=body)) as c:
        result = send_notification("https://example.com/", {}, client=c)
    assert result == {"success": False, "error": expected}


def test_send_rejects_html_page():
    with client_for(lambda r: httpx.Response(200, text=GOOGLE_405)) as c:
        result = send_notification("https://google.com/", {}, client=c)
    assert result["success"] is False
    assert result["error"].startswith("Invalid webhook endpoint: https://google.com/")


def test_send_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with client_for(handler) as c:
        result = send_notification("https://example.com/", {}, client=c)
    assert result == {"success": False, "error": "Network error: connection refused"}
