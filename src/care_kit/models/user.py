# src/care_kit/models/user.py
"""SQLAlchemy models for study participants."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from care_kit.db.session import Base
from care_kit.db.time import utcnow

if TYPE_CHECKING:
    from .stress import StressRecord

ROLE_USER = "user"
ROLE_ADMIN = "admin"


def _new_uid() -> str:
    return uuid.uuid4().hex


class User(Base):
    """A study participant (or researcher, when ``role`` is admin)."""

    __tablename__ = "participant"

    uid: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_uid)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    participant_id: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    memorable_code_word: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_USER)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    # ISO-8601 UTC string; written once at signup.
    study_start_date: Mapped[str] = mapped_column(String(40), nullable=False)
    has_completed_study: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    stress_records: Mapped[list[StressRecord]] = relationship(
        "StressRecord",
        back_populates="creator",
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        """Return True if the account may use researcher endpoints."""
        return self.role == ROLE_ADMIN
