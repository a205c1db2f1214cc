# src/care_kit/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .admin import AdminStressRow, AdminUser
from .stress import StressRecordCreate, StressRecordResponse
from .study import AffirmationRequest, AffirmationResponse, StudyTodayResponse
from .user import LoginRequest, LoginResponse, ParticipantProfile, SignupRequest, SignupResponse

__all__ = [
    "AdminStressRow", "AdminUser",
    "StressRecordCreate", "StressRecordResponse",
    "AffirmationRequest", "AffirmationResponse", "StudyTodayResponse",
    "LoginRequest", "LoginResponse", "ParticipantProfile", "SignupRequest", "SignupResponse",
]
