"""CRUD-style helpers for managing participants."""
from __future__ import annotations

import logging
from datetime import datetime, tzinfo

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from care_kit.core import security
from care_kit.core.settings import settings
from care_kit.db.time import isoformat_utc, utcnow
from care_kit.models import ROLE_ADMIN, ROLE_USER, User
from care_kit.schemas.user import SignupRequest
from care_kit.services.participant_ids import SequentialIdAllocator
from care_kit.services.study_calendar import get_zone, has_completed_seven_days

logger = logging.getLogger(__name__)

__all__ = [
    "DuplicateEmailError",
    "authenticate",
    "create_participant",
    "get_user",
    "get_user_by_email",
    "mark_study_completed",
    "participant_zone",
    "set_role",
]


class DuplicateEmailError(Exception):
    """Raised when an account already exists for an e-mail address."""


def get_user(db: Session, uid: str) -> User | None:
    """Return a single participant by primary key."""
    return db.query(User).filter(User.uid == uid).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Return the participant registered under ``email``, if any."""
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_participant(
    db: Session,
    payload: SignupRequest,
    allocator: SequentialIdAllocator,
    now: datetime | None = None,
) -> User:
    """Allocate a participant ID and persist a new account.

    The study clock starts at ``now``. Allocation happens before the insert
    and is not part of the same transaction, so a failure in between burns
    one ID without creating an account.

    Raises:
        DuplicateEmailError: if the e-mail is already registered, including by a
            signup that commits while this one is in flight.
        AllocationFailedError: if no participant ID could be committed.
    """
    if get_user_by_email(db, payload.email) is not None:
        raise DuplicateEmailError(payload.email)

    participant_id = allocator.allocate()
    user = User(
        email=payload.email,
        password_hash=security.hash_password(payload.password),
        name=payload.name,
        participant_id=participant_id,
        memorable_code_word=payload.memorable_code_word,
        role=ROLE_USER,
        timezone=payload.timezone or settings.study_timezone,
        study_start_date=isoformat_utc(now or utcnow()),
        has_completed_study=False,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        logger.warning("Signup for %s collided on commit; %s unused", payload.email, participant_id)
        raise DuplicateEmailError(payload.email) from err
    db.refresh(user)
    logger.info("Created participant %s (uid=%s)", participant_id, user.uid)
    return user


def authenticate(db: Session, email: str, password: str) -> User | None:
    """Return the participant if the credentials match."""
    user = get_user_by_email(db, email)
    if user is None or not security.verify_password(password, user.password_hash):
        return None
    return user


def participant_zone(user: User) -> tzinfo:
    """Return the tzinfo that defines ``user``'s day boundary."""
    return get_zone(user.timezone or settings.study_timezone)


def mark_study_completed(db: Session, user: User, now: datetime) -> bool:
    """Flip ``has_completed_study`` once seven study days have passed.

    The flag only ever moves from False to True. Returns True if this call
    changed it.
    """
    if user.has_completed_study:
        return False
    if not has_completed_seven_days(user.study_start_date, now, participant_zone(user)):
        return False
    user.has_completed_study = True
    db.add(user)
    db.commit()
    logger.info("Participant %s completed the study", user.participant_id)
    return True


def set_role(db: Session, user: User, role: str) -> User:
    """Change the account role (``user`` or ``admin``)."""
    if role not in (ROLE_USER, ROLE_ADMIN):
        raise ValueError(f"Unknown role: {role}")
    user.role = role
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
