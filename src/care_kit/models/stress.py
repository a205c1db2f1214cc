# src/care_kit/models/stress.py
"""Stress rating records captured around an affirmation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from care_kit.db.session import Base

if TYPE_CHECKING:
    from .user import User


class StressRecord(Base):
    """One completed morning or evening flow."""

    __tablename__ = "stress_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    creator_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("participant.uid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    affirmation_type: Mapped[str] = mapped_column(String(16), nullable=False)
    affirmation: Mapped[str] = mapped_column(Text, nullable=False)
    affirmation_index: Mapped[int] = mapped_column(Integer, nullable=False)
    study_day: Mapped[int] = mapped_column(Integer, nullable=False)
    stress_before: Mapped[int] = mapped_column(Integer, nullable=False)
    stress_after: Mapped[int] = mapped_column(Integer, nullable=False)

    # Timestamps are ISO-8601 UTC strings, matching the participant start date.
    timestamp: Mapped[str] = mapped_column(String(40), nullable=False, index=True)
    flow_start_time: Mapped[str] = mapped_column(String(40), nullable=False)
    affirmation_start_time: Mapped[str] = mapped_column(String(40), nullable=False)
    affirmation_end_time: Mapped[str] = mapped_column(String(40), nullable=False)
    flow_end_time: Mapped[str] = mapped_column(String(40), nullable=False)
    affirmation_duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    total_flow_duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False)

    creator: Mapped[User] = relationship("User", back_populates="stress_records")
