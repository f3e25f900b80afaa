# backend/scripts/create_tables.py
"""
Create every table on DATABASE_URL. With SEED_DEFAULT_EMPLOYEES=true (or --seed),
an empty employees table is filled with five demo employees.
"""
import sys

from sqlalchemy import inspect, select, func

from paracal.config import get_settings
from paracal.db import SessionLocal, engine, init_db
from paracal.models.employee import Employee

DEFAULT_EMPLOYEES = [
    "John Smith",
    "Sarah Johnson",
    "Michael Brown",
    "Emily Davis",
    "David Wilson",
]


def seed_employees(session) -> int:
    """Insert the demo employees when the table is empty; returns rows added."""
    if session.execute(select(func.count()).select_from(Employee)).scalar_one() > 0:
        return 0
    session.add_all([Employee(name=n) for n in DEFAULT_EMPLOYEES])
    session.commit()
    return len(DEFAULT_EMPLOYEES)


def main(argv=None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    init_db()

    if "--seed" in argv or get_settings().SEED_DEFAULT_EMPLOYEES:
        with SessionLocal() as s:
            added = seed_employees(s)
        print(f"seeded employees: {added}")

    # Show what was actually created
    insp = inspect(engine)
    print("tables:", insp.get_table_names(schema=None))


if __name__ == "__main__":
    main()
