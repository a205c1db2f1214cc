"""Persistence for completed stress-rating flows."""
from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from care_kit.db.time import isoformat_utc, utcnow
from care_kit.models import StressRecord, User
from care_kit.schemas.stress import StressRecordCreate
from care_kit.services.affirmations import affirmation_for
from care_kit.services.study_calendar import (
    TimestampLike,
    affirmation_index,
    parse_timestamp,
    study_day,
)
from care_kit.services.user_service import participant_zone

logger = logging.getLogger(__name__)


class StressRecordError(Exception):
    """Raised when a flow cannot be recorded at the given time."""


def _round_seconds(start: datetime, end: datetime) -> int:
    """Return whole seconds between two instants, halves rounding up."""
    delta = (parse_timestamp(end) - parse_timestamp(start)).total_seconds()
    return int(math.floor(delta + 0.5))


def shown_at(affirmation_start: TimestampLike, saved_at: TimestampLike) -> datetime:
    """Return when the affirmation was put on screen, never later than ``saved_at``."""
    return min(parse_timestamp(affirmation_start), parse_timestamp(saved_at))


def save_stress_record(
    db: Session,
    user: User,
    payload: StressRecordCreate,
    now: datetime | None = None,
) -> StressRecord:
    """Store one flow for ``user``.

    The affirmation text, slot and study day are derived from the study
    calendar at the moment the affirmation was shown, not trusted from the
    client. A flow that runs past local midnight keeps the day it started on.

    Raises:
        StressRecordError: if the affirmation was shown before the participant's
            first study day.
    """
    now = now or utcnow()
    tz = participant_zone(user)
    moment = shown_at(payload.affirmation_start_time, now)
    day = study_day(user.study_start_date, moment, tz)
    if day < 1:
        raise StressRecordError("Study has not started yet")
    is_morning = payload.affirmation_type == "morning"
    index = affirmation_index(user.study_start_date, moment, is_morning, tz)

    record = StressRecord(
        creator_id=user.uid,
        affirmation_type=payload.affirmation_type,
        affirmation=affirmation_for(index),
        affirmation_index=index,
        study_day=day,
        stress_before=payload.stress_before,
        stress_after=payload.stress_after,
        timestamp=isoformat_utc(now),
        flow_start_time=isoformat_utc(payload.flow_start_time),
        affirmation_start_time=isoformat_utc(payload.affirmation_start_time),
        affirmation_end_time=isoformat_utc(payload.affirmation_end_time),
        flow_end_time=isoformat_utc(payload.flow_end_time),
        affirmation_duration_seconds=_round_seconds(
            payload.affirmation_start_time, payload.affirmation_end_time
        ),
        total_flow_duration_seconds=_round_seconds(
            payload.flow_start_time, payload.flow_end_time
        ),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(
        "Saved %s stress record %d for %s (day %d)",
        record.affirmation_type,
        record.id,
        user.participant_id,
        record.study_day,
    )
    return record


def list_stress_records(db: Session, user: User) -> Sequence[StressRecord]:
    """Return ``user``'s records, newest first."""
    return (
        db.query(StressRecord)
        .filter(StressRecord.creator_id == user.uid)
        .order_by(StressRecord.timestamp.desc(), StressRecord.id.desc())
        .all()
    )
