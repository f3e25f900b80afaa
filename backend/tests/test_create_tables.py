from sqlalchemy import select

from paracal.models.employee import Employee
from scripts.create_tables import DEFAULT_EMPLOYEES, seed_employees


def test_seed_fills_empty_table_once(db):
    assert seed_employees(db) == 5
    assert seed_employees(db) == 0
    names = db.execute(select(Employee.name).order_by(Employee.id)).scalars().all()
    assert names == DEFAULT_EMPLOYEES


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert "timestamp" in body
