"""Researcher export schemas."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AdminUser(BaseModel):
    """Participant row in the researcher export."""

    uid: str
    email: str
    participant_id: str
    role: str
    memorable_code_word: str | None = None
    study_start_date: str | None = None
    has_completed_study: bool = False

    model_config = ConfigDict(from_attributes=True)


class AdminStressRow(BaseModel):
    """One stress record joined to its participant."""

    participant_id: str
    memorable_code_word: str | None = None
    affirmation_type: str
    affirmation: str
    stress_before: int | None
    stress_after: int | None
    time_spent_seconds: int
    timestamp: str
    date: str = Field(..., description="Local session date, e.g. \"Mar 3, 2025\"")
    time: str = Field(..., description="Local session time, e.g. \"09:00 AM\"")
    study_day: int | None = None
    affirmation_number: int | None = None
