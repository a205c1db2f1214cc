"""Participant account schemas."""

import re
from zoneinfo import ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from care_kit.services.study_calendar import get_zone

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _normalize_email(v: str) -> str:
    v = v.strip().lower()
    if not _EMAIL_PATTERN.match(v):
        raise ValueError("Email address is not valid")
    return v


class SignupRequest(BaseModel):
    """Schema for creating a participant account."""

    email: str = Field(..., max_length=320, description="Login e-mail address")
    password: str = Field(..., min_length=6, max_length=128, description="Account password")
    name: str | None = Field(None, max_length=100, description="Optional display name")
    memorable_code_word: str | None = Field(
        None,
        min_length=1,
        max_length=64,
        description="Pseudonym shown to researchers instead of the e-mail address",
    )
    timezone: str | None = Field(
        None,
        description="IANA time zone whose midnight starts each study day",
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Trim, lower-case and sanity-check the e-mail address."""
        return _normalize_email(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        """Trim surrounding whitespace from the display name."""
        if v is None:
            return v
        return v.strip() or None

    @field_validator("memorable_code_word")
    @classmethod
    def normalize_code_word(cls, v: str | None) -> str | None:
        """Code words are compared case-insensitively, so store them lower-cased."""
        if v is None:
            return v
        v = v.strip().lower()
        if not v:
            raise ValueError("Memorable code word must not be blank")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        """Reject zone names the tz database does not know."""
        if v is None:
            return v
        try:
            get_zone(v)
        except (ZoneInfoNotFoundError, ValueError) as err:
            raise ValueError(f"Unknown time zone: {v}") from err
        return v


class SignupResponse(BaseModel):
    """Signup confirmation."""

    uid: str = Field(..., description="Opaque account identifier")
    participant_id: str = Field(..., description="Sequential participant ID, e.g. P2025001")
    memorable_code_word: str | None = Field(None, description="Normalized code word")
    study_start_date: str = Field(..., description="ISO-8601 UTC study start")


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Compare e-mail addresses case-insensitively."""
        return v.strip().lower()


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(..., description="Token type (typically 'bearer')")


class ParticipantProfile(BaseModel):
    """The signed-in participant's own account data."""

    uid: str
    email: str
    name: str | None
    participant_id: str
    memorable_code_word: str | None
    role: str
    timezone: str
    study_start_date: str
    has_completed_study: bool

    model_config = ConfigDict(from_attributes=True)
