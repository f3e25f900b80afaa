# backend/paracal/db.py
import os
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from paracal.config import get_settings

# --- SQLAlchemy Base ---------------------------------------------------------
class Base(DeclarativeBase):
    pass

# --- Engine / Session --------------------------------------------------------
DATABASE_URL = get_settings().DATABASE_URL


def _ensure_sqlite_dir(url: str) -> None:
    u = make_url(url)
    if u.get_backend_name() != "sqlite" or not u.database or u.database == ":memory:":
        return
    parent = os.path.dirname(os.path.abspath(u.database))
    os.makedirs(parent, exist_ok=True)


def make_engine(url: str, **kwargs) -> Engine:
    """Engine factory shared by the app and the test fixtures."""
    if url.startswith("sqlite"):
        _ensure_sqlite_dir(url)
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    # pool_pre_ping avoids “stale” connections on container restarts
    eng = create_engine(url, pool_pre_ping=True, future=True, **kwargs)
    if eng.dialect.name == "sqlite":
        event.listen(eng, "connect", _enable_sqlite_fks)
    return eng


def _enable_sqlite_fks(dbapi_conn, _record) -> None:
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys = ON")
    cur.close()


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)

# FastAPI dependency
def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Used by app startup and scripts/create_tables.py
def init_db(bind: Engine | None = None) -> None:
    # import models so every table is registered on Base.metadata
    import paracal.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)

# Used by the /health route; raises if the store is unreachable
def healthcheck(db) -> None:
    db.execute(text("SELECT 1"))
