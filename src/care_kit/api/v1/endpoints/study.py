# src/care_kit/api/v1/endpoints/study.py
"""Daily study schedule endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from care_kit.api.v1.dependencies import CurrentUserDep, NowDep, SessionDep
from care_kit.core.settings import settings
from care_kit.schemas.study import AffirmationRequest, AffirmationResponse, StudyTodayResponse
from care_kit.services import study_calendar, user_service
from care_kit.services.affirmations import affirmation_for

router = APIRouter(prefix="/study", tags=["study"])


@router.get("/today", response_model=StudyTodayResponse)
async def get_today(user: CurrentUserDep, db: SessionDep, now: NowDep) -> StudyTodayResponse:
    """Report the participant's study day and which affirmations apply today.

    Also sets the completion flag the first time day 7 is reached.
    """
    tz = user_service.participant_zone(user)
    day = study_calendar.study_day(user.study_start_date, now, tz)
    user_service.mark_study_completed(db, user, now)

    return StudyTodayResponse(
        study_day=day,
        started=day >= 1,
        cycle_day=study_calendar.cycle_day(day),
        morning_index=study_calendar.affirmation_index(user.study_start_date, now, True, tz),
        evening_index=study_calendar.affirmation_index(user.study_start_date, now, False, tz),
        evening_unlocked=study_calendar.is_evening_unlocked(
            now, tz, settings.evening_unlock_hour
        ),
        has_completed_study=user.has_completed_study,
        timezone=user.timezone,
    )


@router.post("/affirmation", response_model=AffirmationResponse)
async def get_affirmation(
    payload: AffirmationRequest,
    user: CurrentUserDep,
    now: NowDep,
) -> AffirmationResponse:
    """Return the affirmation for the requested session at the current time."""
    tz = user_service.participant_zone(user)
    day = study_calendar.study_day(user.study_start_date, now, tz)
    if day < 1:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Study has not started yet",
        )

    is_morning = payload.affirmation_type == "morning"
    if not is_morning and not study_calendar.is_evening_unlocked(
        now, tz, settings.evening_unlock_hour
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Evening affirmation unlocks at {settings.evening_unlock_hour}:00",
        )

    index = study_calendar.affirmation_index(user.study_start_date, now, is_morning, tz)
    return AffirmationResponse(
        affirmation_type=payload.affirmation_type,
        affirmation_index=index,
        affirmation=affirmation_for(index),
        study_day=day,
    )
