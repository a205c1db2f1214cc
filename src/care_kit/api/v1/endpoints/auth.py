# src/care_kit/api/v1/endpoints/auth.py
"""Authentication endpoints for the Care Kit API."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

from fastapi import APIRouter, HTTPException, status
from jose import jwt

from care_kit.api.v1.dependencies import AllocatorDep, CurrentUserDep, NowDep, SessionDep
from care_kit.core.settings import settings
from care_kit.schemas.user import (
    LoginRequest,
    LoginResponse,
    ParticipantProfile,
    SignupRequest,
    SignupResponse,
)
from care_kit.services import user_service
from care_kit.services.participant_ids import AllocationFailedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def create_access_token(subject: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create JWT access token for user authentication."""
    to_encode: dict[str, object] = {"sub": subject}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


@router.post(
    "/signup",
    summary="Create a participant account",
    status_code=status.HTTP_201_CREATED,
    response_model=SignupResponse,
)
async def signup(
    payload: SignupRequest,
    db: SessionDep,
    allocator: AllocatorDep,
    now: NowDep,
) -> SignupResponse:
    """Register a participant, assign a sequential ID and start their study clock."""
    try:
        user = user_service.create_participant(db, payload, allocator, now)
    except user_service.DuplicateEmailError as err:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this e-mail already exists",
        ) from err
    except AllocationFailedError as err:
        logger.error("Signup for %s aborted: %s", payload.email, err)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not complete signup, please try again",
        ) from err

    return SignupResponse(
        uid=user.uid,
        participant_id=user.participant_id,
        memorable_code_word=user.memorable_code_word,
        study_start_date=user.study_start_date,
    )


@router.post(
    "/login",
    summary="Authenticate with e-mail and password",
    status_code=status.HTTP_200_OK,
    response_model=LoginResponse,
)
async def login(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Exchange credentials for a bearer token."""
    user = user_service.authenticate(db, payload.email, payload.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect e-mail or password",
        )
    return LoginResponse(access_token=create_access_token(user.uid), token_type="bearer")


@router.get("/me", summary="Return the signed-in participant", response_model=ParticipantProfile)
async def read_me(user: CurrentUserDep) -> ParticipantProfile:
    """Return the authenticated participant's account data."""
    return ParticipantProfile.model_validate(user)
