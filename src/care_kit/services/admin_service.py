"""Researcher-facing aggregation of participants and stress records."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC

from sqlalchemy.orm import Session

from care_kit.models import StressRecord, User
from care_kit.schemas.admin import AdminStressRow
from care_kit.services.stress_service import shown_at
from care_kit.services.study_calendar import affirmation_index, parse_timestamp, study_day
from care_kit.services.user_service import participant_zone

logger = logging.getLogger(__name__)


def _sort_key(user: User) -> str:
    return (user.memorable_code_word or user.email or "").casefold()


def get_all_users(db: Session) -> list[User]:
    """Return every account, ordered by code word (falling back to e-mail)."""
    users = db.query(User).all()
    return sorted(users, key=_sort_key)


def get_completed_study_users(db: Session) -> list[User]:
    """Return only participants whose completion flag is set."""
    return [user for user in get_all_users(db) if user.has_completed_study]


def _export_row(record: StressRecord, user: User | None) -> AdminStressRow:
    day: int | None = None
    number: int | None = None
    tz = participant_zone(user) if user is not None else UTC
    if user is not None and user.study_start_date:
        # Evaluated when the affirmation was shown, not at export time.
        moment = shown_at(record.affirmation_start_time, record.timestamp)
        day = study_day(user.study_start_date, moment, tz)
        number = affirmation_index(
            user.study_start_date,
            moment,
            record.affirmation_type == "morning",
            tz,
        )
    local = parse_timestamp(record.timestamp).astimezone(tz)

    if user is not None:
        pseudonym = user.memorable_code_word or user.participant_id or record.creator_id
    else:
        pseudonym = record.creator_id

    return AdminStressRow(
        participant_id=pseudonym,
        memorable_code_word=user.memorable_code_word if user is not None else None,
        affirmation_type=record.affirmation_type or "",
        affirmation=record.affirmation or "",
        stress_before=record.stress_before,
        stress_after=record.stress_after,
        time_spent_seconds=record.affirmation_duration_seconds or 0,
        timestamp=record.timestamp,
        date=f"{local:%b} {local.day}, {local.year}",
        time=local.strftime("%I:%M %p"),
        study_day=day,
        affirmation_number=number,
    )


def get_all_stress_data(db: Session) -> list[AdminStressRow]:
    """Return every stress record, newest first, joined to its participant."""
    users_by_uid = {user.uid: user for user in db.query(User).all()}
    records: Sequence[StressRecord] = (
        db.query(StressRecord)
        .order_by(StressRecord.timestamp.desc(), StressRecord.id.desc())
        .all()
    )
    rows = [_export_row(record, users_by_uid.get(record.creator_id)) for record in records]
    logger.info("Exported %d stress records for %d participants", len(rows), len(users_by_uid))
    return rows
