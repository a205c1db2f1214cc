"""Study schedule schemas."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

AffirmationType = Literal["morning", "evening"]


class StudyTodayResponse(BaseModel):
    """Where the participant stands in the study right now."""

    study_day: int = Field(..., description="1-based study day; <= 0 before the start date")
    started: bool = Field(..., description="False while study_day is not positive")
    cycle_day: int = Field(..., ge=0, le=6, description="Position in the 7-day affirmation cycle")
    morning_index: int = Field(..., ge=0, le=13)
    evening_index: int = Field(..., ge=0, le=13)
    evening_unlocked: bool = Field(..., description="True once the local evening unlock hour passed")
    has_completed_study: bool
    timezone: str


class AffirmationRequest(BaseModel):
    """Request the affirmation for the current session."""

    affirmation_type: AffirmationType


class AffirmationResponse(BaseModel):
    """The affirmation to show, and the slot it came from."""

    affirmation_type: AffirmationType
    affirmation_index: int = Field(..., ge=0, le=13)
    affirmation: str
    study_day: int
