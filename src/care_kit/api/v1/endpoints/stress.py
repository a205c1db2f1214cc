# src/care_kit/api/v1/endpoints/stress.py
"""Stress rating endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from care_kit.api.v1.dependencies import CurrentUserDep, NowDep, SessionDep
from care_kit.schemas.stress import StressRecordCreate, StressRecordResponse
from care_kit.services import stress_service

router = APIRouter(prefix="/stress-records", tags=["stress"])


@router.post(
    "",
    summary="Save a completed stress-rating flow",
    status_code=status.HTTP_201_CREATED,
    response_model=StressRecordResponse,
)
async def create_stress_record(
    payload: StressRecordCreate,
    user: CurrentUserDep,
    db: SessionDep,
    now: NowDep,
) -> StressRecordResponse:
    """Persist pre/post ratings and flow timings for the signed-in participant."""
    try:
        record = stress_service.save_stress_record(db, user, payload, now)
    except stress_service.StressRecordError as err:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(err),
        ) from err
    return StressRecordResponse.model_validate(record)


@router.get("/me", response_model=list[StressRecordResponse])
async def list_my_stress_records(user: CurrentUserDep, db: SessionDep) -> list[StressRecordResponse]:
    """List the signed-in participant's records, newest first."""
    return [
        StressRecordResponse.model_validate(record)
        for record in stress_service.list_stress_records(db, user)
    ]
