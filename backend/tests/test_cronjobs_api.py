import pytest

PAYLOAD = {
    "name": "Morning digest",
    "enabled": True,
    "schedule_time": "09:00",
    "webhook_url": "https://example.com/hook",
    "notification_days": 1,
}


@pytest.fixture()
def cronjob(client):
    r = client.post("/cronjobs", json=PAYLOAD)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_create_wraps_in_envelope(client):
    r = client.post("/cronjobs", json=PAYLOAD)
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Cronjob configuration created successfully"
    data = body["data"]
    assert data["schedule_time"] == "09:00"
    assert data["notification_type"] == "daily"
    assert data["weekly_scope"] == "current"


def test_list_and_get(client, cronjob):
    body = client.get("/cronjobs").json()
    assert body["success"] is True
    assert [c["name"] for c in body["data"]] == ["Morning digest"]

    assert client.get(f"/cronjobs/{cronjob['id']}").json()["data"]["id"] == cronjob["id"]
    assert client.get("/cronjobs/999").status_code == 404


def test_status_lists_enabled(client, cronjob):
    client.post("/cronjobs", json={**PAYLOAD, "name": "Off", "enabled": False})
    data = client.get("/cronjobs/status").json()["data"]
    assert [d["name"] for d in data] == ["Morning digest"]
    assert data[0]["running"] is False  # scheduler disabled under test


def test_update(client, cronjob):
    r = client.put(f"/cronjobs/{cronjob['id']}", json={
        "notification_type": "weekly", "weekly_days": [1, 5, 1], "weekly_scope": "next",
    })
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["notification_type"] == "weekly"
    assert data["weekly_days"] == [1, 5]
    assert data["weekly_scope"] == "next"
    assert data["name"] == "Morning digest"


def test_update_missing_is_404(client):
    assert client.put("/cronjobs/999", json={"enabled": False}).status_code == 404


def test_delete(client, cronjob):
    r = client.delete(f"/cronjobs/{cronjob['id']}")
    assert r.json() == {"success": True, "message": "Cronjob configuration deleted successfully"}
    assert client.delete(f"/cronjobs/{cronjob['id']}").status_code == 404


def test_duplicate_name_is_409(client, cronjob):
    r = client.post("/cronjobs", json=PAYLOAD)
    assert r.status_code == 409
    assert r.json()["code"] == "duplicate_name"


@pytest.mark.parametrize("field,value", [
    ("schedule_time", "9:00"),
    ("schedule_time", "24:00"),
    ("weekly_days", [7]),
    ("notification_type", "monthly"),
    ("notification_days", -1),
])
def test_validation(client, field, value):
    r = client.post("/cronjobs", json={**PAYLOAD, field: value})
    assert r.status_code == 422


def test_send_test_notification(client, cronjob, webhook):
    r = client.post(f"/cronjobs/{cronjob['id']}/test", json={"customMessage": "Hello team"})
    assert r.json() == {"success": True, "message": "Test notification sent successfully"}
    assert len(webhook.requests) == 1
    assert b"Hello team" in webhook.requests[0].content


def test_send_test_notification_without_body(client, cronjob, webhook):
    r = client.post(f"/cronjobs/{cronjob['id']}/test")
    assert r.json()["success"] is True
    assert len(webhook.requests) == 1


def test_send_test_notification_failure(client, cronjob, webhook):
    webhook.status, webhook.body = 405, "<html></html>"
    body = client.post(f"/cronjobs/{cronjob['id']}/test").json()
    assert body["success"] is False
    assert body["error"] == "Method not allowed: https://example.com/hook (405)"


def test_send_test_notification_unknown(client):
    body = client.post("/cronjobs/999/test").json()
    assert body == {
        "success": False,
        "message": "Cronjob configuration 999 not found",
        "error": "Cronjob configuration 999 not found",
    }
