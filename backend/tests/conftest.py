# backend/tests/conftest.py
import os

# must be set before paracal.db / paracal.main are imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ.setdefault("APP_TZ", "Asia/Bangkok")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from paracal.db import Base, get_db, make_engine
import paracal.models  # noqa: F401
from paracal.main import build_app
from paracal.routers.cronjobs import get_cronjob_service
from paracal.services.scheduler import CronjobService


@pytest.fixture()
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


class WebhookRecorder:
    """httpx MockTransport handler that records requests and replays a canned response."""

    def __init__(self, status=200, body="ok"):
        self.status = status
        self.body = body
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, text=self.body)


@pytest.fixture()
def webhook():
    return WebhookRecorder()


@pytest.fixture()
def http_client(webhook):
    with httpx.Client(transport=httpx.MockTransport(webhook)) as c:
        yield c


@pytest.fixture()
def cronjob_service(session_factory, http_client):
    return CronjobService(session_factory, client=http_client)


@pytest.fixture()
def client(session_factory, cronjob_service):
    app = build_app(cronjob_service)

    def override_get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cronjob_service] = lambda: cronjob_service
    return TestClient(app)
