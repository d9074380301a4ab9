# tests/conftest.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from miledesigns.core.config import wire_services
from miledesigns.db.base import Base
from miledesigns.db.session import get_db
from miledesigns.models.auth import User
from miledesigns.services.content_store import ContentStore
from miledesigns.services.identity import issue_access_token, provision_user
import miledesigns.models.content  # noqa: F401  (register site_content on the metadata)

DEFAULT_PASSWORD = "correct-horse-1"


@pytest.fixture
def engine():
    """
    SQLite en memoria, UNA conexión compartida (StaticPool) para que
    la app (threadpool) y las pruebas vean las mismas tablas.
    """
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(session_factory) -> ContentStore:
    return ContentStore(session_factory)


@pytest.fixture
def make_user(session_factory):
    """Creates a login and returns (user, access_token)."""
    def _make(email: str, password: str = DEFAULT_PASSWORD, *, superadmin: bool = False) -> tuple[User, str]:
        with session_factory.begin() as s:
            user = provision_user(s, email=email, password=password, is_superadmin=superadmin)
            token = issue_access_token(user)
            s.expunge(user)
        return user, token
    return _make


@pytest.fixture
def app(session_factory):
    """
    The real app, re-wired to the per-test engine: services on app.state
    and get_db overridden via dependency_overrides.
    """
    from miledesigns.main import app as _app  # import tardío

    wire_services(_app, session_factory)

    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    _app.dependency_overrides[get_db] = _get_db
    try:
        yield _app
    finally:
        _app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_headers(make_user) -> dict:
    _, token = make_user("owner@example.com", superadmin=True)
    return {"Authorization": f"Bearer {token}"}


class FakeIdentity:
    """Records provisioning calls; optionally fails them."""

    def __init__(self, fail_with: Exception | None = None):
        self.calls: list[tuple[str, str]] = []
        self.fail_with = fail_with

    def create_user_from_admin(self, email: str, password: str) -> None:
        self.calls.append((email, password))
        if self.fail_with:
            raise self.fail_with


@pytest.fixture
def fake_identity() -> FakeIdentity:
    return FakeIdentity()
