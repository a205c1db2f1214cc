"""Stress rating schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from care_kit.services.study_calendar import parse_timestamp

from .study import AffirmationType

RATING_MIN = 1
RATING_MAX = 5


class StressRecordCreate(BaseModel):
    """A completed pre-rating / affirmation / post-rating flow."""

    affirmation_type: AffirmationType
    stress_before: int = Field(..., ge=RATING_MIN, le=RATING_MAX, description="1 very calm, 5 very stressed")
    stress_after: int = Field(..., ge=RATING_MIN, le=RATING_MAX)
    flow_start_time: datetime
    affirmation_start_time: datetime
    affirmation_end_time: datetime
    flow_end_time: datetime

    @model_validator(mode="after")
    def check_time_order(self) -> "StressRecordCreate":
        """The four flow timestamps must not go backwards."""
        ordered = [
            parse_timestamp(moment)
            for moment in (
                self.flow_start_time,
                self.affirmation_start_time,
                self.affirmation_end_time,
                self.flow_end_time,
            )
        ]
        if any(later < earlier for earlier, later in zip(ordered, ordered[1:])):
            raise ValueError("Flow timestamps must be in chronological order")
        return self


class StressRecordResponse(BaseModel):
    """A stored stress record."""

    id: int
    affirmation_type: str
    affirmation: str
    affirmation_index: int
    study_day: int
    stress_before: int
    stress_after: int
    timestamp: str
    flow_start_time: str
    affirmation_start_time: str
    affirmation_end_time: str
    flow_end_time: str
    affirmation_duration_seconds: int
    total_flow_duration_seconds: int

    model_config = ConfigDict(from_attributes=True)
