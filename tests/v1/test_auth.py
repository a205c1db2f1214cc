# tests/v1/test_auth.py
"""Tests for signup, login and the signed-in profile."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import FastAPI, status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from care_kit.api.v1.dependencies import SessionDep, get_allocator
from care_kit.api.v1.endpoints.auth import create_access_token
from care_kit.models import Counter, User
from care_kit.services.participant_ids import CounterConflictError, SequentialIdAllocator


class _ExhaustedStore:
    def run_transaction(self, name: str, compute: Callable[[int | None], int]) -> int:
        raise CounterConflictError(name, 5)


def _payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "email": "someone@example.com",
        "password": "correct horse",
        "name": "Someone",
        "memorable_code_word": "lantern",
    }
    payload.update(overrides)
    return payload


def test_signup_assigns_sequential_ids(signup) -> None:
    first = signup()
    second = signup()
    third = signup()
    assert [first["participant_id"], second["participant_id"], third["participant_id"]] == [
        "P2025001",
        "P2025002",
        "P2025003",
    ]
    assert len({first["uid"], second["uid"], third["uid"]}) == 3


def test_signup_starts_study_clock_now(signup, clock) -> None:
    body = signup()
    assert body["study_start_date"] == "2025-03-03T09:00:00.000Z"


def test_signup_normalizes_email_and_code_word(client: TestClient, db_session: Session) -> None:
    r = client.post(
        "/api/v1/auth/signup",
        json=_payload(email="  Mixed.Case@Example.COM ", memorable_code_word="  SunFlower "),
    )
    assert r.status_code == status.HTTP_201_CREATED
    assert r.json()["memorable_code_word"] == "sunflower"

    user = db_session.query(User).filter(User.uid == r.json()["uid"]).one()
    assert user.email == "mixed.case@example.com"
    assert user.timezone == "UTC"
    assert user.password_hash != "correct horse"
    assert user.has_completed_study is False
    assert user.role == "user"


def test_signup_duplicate_email_conflict(client: TestClient, signup) -> None:
    signup(email="dup@example.com")
    r = client.post("/api/v1/auth/signup", json=_payload(email="DUP@example.com"))
    assert r.status_code == status.HTTP_409_CONFLICT

    # The rejected signup did not consume a participant ID.
    assert signup()["participant_id"] == "P2025002"


def test_signup_validation_errors(client: TestClient) -> None:
    cases = [
        _payload(email="not-an-email"),
        _payload(password="short"),
        _payload(memorable_code_word="   "),
        _payload(timezone="Atlantis/Capital"),
    ]
    for payload in cases:
        r = client.post("/api/v1/auth/signup", json=payload)
        assert r.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY, payload


def test_signup_reports_allocation_failure(
    client: TestClient, app: FastAPI, db_session: Session
) -> None:
    app.dependency_overrides[get_allocator] = lambda: SequentialIdAllocator(_ExhaustedStore())
    try:
        r = client.post("/api/v1/auth/signup", json=_payload())
    finally:
        app.dependency_overrides.pop(get_allocator, None)

    assert r.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert r.json()["detail"] == "Could not complete signup, please try again"
    assert db_session.query(User).count() == 0
    assert db_session.query(Counter).count() == 0


def test_login_success(client: TestClient, signup) -> None:
    body = signup(email="login@example.com", password="open sesame")
    r = client.post(
        "/api/v1/auth/login",
        json={"email": "Login@Example.com", "password": "open sesame"},
    )
    assert r.status_code == status.HTTP_200_OK
    data = r.json()
    assert data["token_type"] == "bearer"

    me = client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {data['access_token']}"},
    )
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["uid"] == body["uid"]


def test_login_wrong_password(client: TestClient, signup) -> None:
    signup(email="login@example.com", password="open sesame")
    r = client.post(
        "/api/v1/auth/login",
        json={"email": "login@example.com", "password": "open barley"},
    )
    assert r.status_code == status.HTTP_401_UNAUTHORIZED


def test_login_unknown_email(client: TestClient) -> None:
    r = client.post(
        "/api/v1/auth/login",
        json={"email": "nobody@example.com", "password": "whatever"},
    )
    assert r.status_code == status.HTTP_401_UNAUTHORIZED
    assert r.json()["detail"] == "Incorrect e-mail or password"


def test_me_returns_profile(client: TestClient, participant) -> None:
    r = client.get("/api/v1/auth/me", headers=participant["headers"])
    assert r.status_code == status.HTTP_200_OK
    data = r.json()
    assert data["participant_id"] == participant["participant_id"]
    assert data["email"] == participant["email"]
    assert data["study_start_date"] == participant["study_start_date"]
    assert "password_hash" not in data


def test_me_rejects_bad_tokens(client: TestClient) -> None:
    r = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == status.HTTP_401_UNAUTHORIZED

    ghost = create_access_token("0" * 32)
    r = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {ghost}"})
    assert r.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_requires_credentials(client: TestClient) -> None:
    r = client.get("/api/v1/auth/me")
    assert r.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_signup_race_on_same_email_is_a_conflict(client: TestClient, app: FastAPI) -> None:
    class _RacingAllocator:
        """Commits another account for the same address while allocating."""

        def __init__(self, db: Session) -> None:
            self.db = db

        def allocate(self) -> str:
            self.db.add(
                User(
                    email="race@example.com",
                    password_hash="x",
                    participant_id="P2025998",
                    study_start_date="2025-03-03T08:59:00.000Z",
                )
            )
            self.db.commit()
            return "P2025999"

    def _racing_allocator(db: SessionDep):
        return _RacingAllocator(db)

    app.dependency_overrides[get_allocator] = _racing_allocator
    try:
        r = client.post("/api/v1/auth/signup", json=_payload(email="race@example.com"))
    finally:
        app.dependency_overrides.pop(get_allocator, None)

    assert r.status_code == status.HTTP_409_CONFLICT
    assert r.json()["detail"] == "An account with this e-mail already exists"
