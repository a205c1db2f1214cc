# src/care_kit/api/v1/endpoints/system.py
"""System and transparency endpoints for the Care Kit API."""

from __future__ import annotations

from fastapi import APIRouter

from care_kit.core.settings import settings
from care_kit.services.study_calendar import AFFIRMATION_SLOTS, COMPLETION_DAY

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "jwt_algorithm": settings.jwt_algorithm,
            "access_token_expire_minutes": settings.access_token_expire_minutes,
            "debug": settings.debug,
        },
        "study": {
            "completion_day": COMPLETION_DAY,
            "affirmation_slots": AFFIRMATION_SLOTS,
            "evening_unlock_hour": settings.evening_unlock_hour,
            "default_timezone": settings.study_timezone,
        },
        "participant_ids": {
            "prefix": settings.participant_id_prefix,
        },
    }
