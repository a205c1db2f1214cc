# tests/v1/test_admin.py
"""Tests for the researcher export endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from care_kit.services.affirmations import AFFIRMATIONS

ADMIN_PATHS = ["/api/v1/admin/users", "/api/v1/admin/users/completed", "/api/v1/admin/stress-data"]


def _flow(now, kind: str = "morning") -> dict[str, object]:
    return {
        "affirmation_type": kind,
        "stress_before": 5,
        "stress_after": 3,
        "flow_start_time": (now - timedelta(minutes=3)).isoformat(),
        "affirmation_start_time": (now - timedelta(minutes=2)).isoformat(),
        "affirmation_end_time": (now - timedelta(seconds=30)).isoformat(),
        "flow_end_time": now.isoformat(),
    }


@pytest.mark.parametrize("path", ADMIN_PATHS)
def test_participants_are_forbidden(client: TestClient, participant, path: str) -> None:
    r = client.get(path, headers=participant["headers"])
    assert r.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.parametrize("path", ADMIN_PATHS)
def test_anonymous_is_rejected(client: TestClient, path: str) -> None:
    r = client.get(path)
    assert r.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_users_sorted_by_code_word_then_email(client: TestClient, admin, signup) -> None:
    signup(memorable_code_word="zebra")
    signup(memorable_code_word="Apple")
    signup(email="mango@example.com", memorable_code_word=None)

    r = client.get("/api/v1/admin/users", headers=admin["headers"])
    assert r.status_code == status.HTTP_200_OK
    users = r.json()
    assert [u["memorable_code_word"] or u["email"] for u in users] == [
        "apple",
        "mango@example.com",
        "researcher",
        "zebra",
    ]
    assert all("password_hash" not in u for u in users)


def test_completed_users(client: TestClient, admin, signup, clock) -> None:
    finisher = signup(memorable_code_word="finisher")
    signup(memorable_code_word="dropout")

    clock.advance(days=6)
    client.get("/api/v1/study/today", headers=finisher["headers"])

    r = client.get("/api/v1/admin/users/completed", headers=admin["headers"])
    assert r.status_code == status.HTTP_200_OK
    assert [u["participant_id"] for u in r.json()] == [finisher["participant_id"]]


def test_stress_export_uses_session_time(client: TestClient, admin, signup, clock) -> None:
    owl = signup(memorable_code_word="owl")
    anonymous = signup(memorable_code_word=None)

    client.post("/api/v1/stress-records", json=_flow(clock.moment), headers=owl["headers"])
    clock.advance(days=2)
    client.post(
        "/api/v1/stress-records",
        json=_flow(clock.moment, kind="evening"),
        headers=anonymous["headers"],
    )

    # Exporting much later must not shift the recorded day or slot.
    clock.advance(days=30)
    r = client.get("/api/v1/admin/stress-data", headers=admin["headers"])
    assert r.status_code == status.HTTP_200_OK
    rows = r.json()
    assert len(rows) == 2

    latest, earliest = rows
    assert latest["participant_id"] == anonymous["participant_id"]
    assert latest["memorable_code_word"] is None
    assert latest["study_day"] == 3
    assert latest["affirmation_number"] == 5
    assert latest["affirmation"] == AFFIRMATIONS[5]

    assert earliest["participant_id"] == "owl"
    assert earliest["study_day"] == 1
    assert earliest["affirmation_number"] == 0
    assert earliest["stress_before"] == 5
    assert earliest["stress_after"] == 3
    assert earliest["time_spent_seconds"] == 90
    assert earliest["timestamp"] == "2025-03-03T09:00:00.000Z"
    assert earliest["date"] == "Mar 3, 2025"
    assert earliest["time"] == "09:00 AM"
