# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from care_kit.api.v1.dependencies import get_now
from care_kit.api.v1.endpoints.auth import create_access_token
from care_kit.db.session import Base
from care_kit.db.session import get_db as app_get_session
from care_kit.main import app as fastapi_app
from care_kit.models import ROLE_ADMIN, User

TEST_DB_URL = "sqlite://"

# A Monday morning, well clear of any midnight in UTC.
STUDY_EPOCH = datetime(2025, 3, 3, 9, 0, tzinfo=UTC)


class FrozenClock:
    """Callable stand-in for ``get_now`` that tests can move forward."""

    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def __call__(self) -> datetime:
        return self.moment

    def set(self, moment: datetime) -> None:
        self.moment = moment

    def advance(self, **kwargs: float) -> datetime:
        self.moment = self.moment + timedelta(**kwargs)
        return self.moment


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory() -> Iterator[sessionmaker[Session]]:
    """Plain, really-committing sessions on a private in-memory database."""
    private_engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=private_engine)
    try:
        yield sessionmaker(
            bind=private_engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
    finally:
        private_engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(autouse=True)
def clock(app: FastAPI) -> Iterator[FrozenClock]:
    """Freeze the API's notion of "now" at ``STUDY_EPOCH``."""
    frozen = FrozenClock(STUDY_EPOCH)
    app.dependency_overrides[get_now] = frozen
    try:
        yield frozen
    finally:
        app.dependency_overrides.pop(get_now, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def auth_headers(uid: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(uid)}"}


@pytest.fixture()
def signup(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Return a helper that signs a participant up through the API.

    The helper returns the signup response body plus ready-made ``headers``.
    """
    counter = iter(range(1, 10_000))

    def _signup(**overrides: Any) -> dict[str, Any]:
        n = next(counter)
        payload = {
            "email": f"participant{n}@example.com",
            "password": "correct horse",
            "name": f"Participant {n}",
            "memorable_code_word": f"codeword{n}",
        }
        payload.update(overrides)
        response = client.post("/api/v1/auth/signup", json=payload)
        assert response.status_code == 201, response.text
        body = response.json()
        body["headers"] = auth_headers(body["uid"])
        body["email"] = payload["email"].strip().lower()
        return body

    return _signup


@pytest.fixture()
def participant(signup: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    """A participant whose study started at ``STUDY_EPOCH``."""
    return signup()


@pytest.fixture()
def admin(db_session: Session, signup: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    """A signed-up account promoted to the admin role."""
    body = signup(email="researcher@example.com", memorable_code_word="researcher")
    user = db_session.get(User, body["uid"])
    assert user is not None
    user.role = ROLE_ADMIN
    db_session.commit()
    return body
