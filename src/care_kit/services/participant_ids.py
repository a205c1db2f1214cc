"""Sequential participant ID allocation.

Participant IDs are human-readable (``P2025001``) and strictly increasing.
Uniqueness comes from an atomic read-modify-write on a single shared counter
row; the allocator itself keeps no state and never caches the count.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from care_kit.core.settings import settings
from care_kit.models import Counter

logger = logging.getLogger(__name__)

STARTING_ID = 2025000
DEFAULT_PREFIX = "P"
PARTICIPANT_COUNTER = "participantId"

__all__ = [
    "AllocationFailedError",
    "CounterConflictError",
    "CounterStore",
    "SequentialIdAllocator",
    "SqlCounterStore",
    "get_participant_id_allocator",
]


class CounterConflictError(Exception):
    """Raised when a counter transaction keeps losing the compare-and-swap."""

    def __init__(self, name: str, attempts: int) -> None:
        super().__init__(f"Counter {name!r} update conflicted {attempts} time(s)")
        self.name = name
        self.attempts = attempts


class AllocationFailedError(Exception):
    """Raised when no participant ID could be committed.

    The underlying store error is available as ``__cause__``. No ID was
    consumed when this is raised.
    """


class CounterStore(Protocol):
    """Transactional home of named integer counters."""

    def run_transaction(self, name: str, compute: Callable[[int | None], int]) -> int:
        """Atomically replace counter ``name`` with ``compute(current)``.

        ``current`` is None when the counter does not exist yet. Returns the
        committed value. Conflicting writers are retried internally; once the
        store gives up it raises :class:`CounterConflictError`.
        """
        ...


class SqlCounterStore:
    """Counter store over the ``counters`` table using optimistic CAS.

    Each attempt re-reads the row and writes with
    ``UPDATE ... WHERE count = <value read>``; a zero row count means another
    writer got there first and the attempt is retried. The first write for a
    name is an INSERT, and a primary-key collision there is treated the same
    way.

    Every attempt runs in its own transaction, so retries see rows committed
    by other writers under snapshot isolation as well as READ COMMITTED.
    """

    def __init__(self, session: Session, max_attempts: int | None = None) -> None:
        self.session = session
        self.max_attempts = max_attempts or settings.counter_max_attempts

    def read(self, name: str) -> int | None:
        """Return the committed value of ``name`` or None if it is unset."""
        return self.session.execute(
            select(Counter.count).where(Counter.name == name)
        ).scalar_one_or_none()

    def _write(self, name: str, current: int | None, new_value: int) -> bool:
        if current is None:
            try:
                with self.session.begin_nested():
                    self.session.execute(insert(Counter).values(name=name, count=new_value))
            except IntegrityError:
                return False
            return True
        result = self.session.execute(
            update(Counter)
            .where(Counter.name == name, Counter.count == current)
            .values(count=new_value)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def run_transaction(self, name: str, compute: Callable[[int | None], int]) -> int:
        for attempt in range(1, self.max_attempts + 1):
            current = self.read(name)
            new_value = compute(current)
            if self._write(name, current, new_value):
                self.session.commit()
                return new_value
            # End the transaction so the next read is not served from its snapshot.
            self.session.rollback()
            logger.warning(
                "Counter %s changed underneath us (attempt %d/%d), retrying",
                name,
                attempt,
                self.max_attempts,
            )
        raise CounterConflictError(name, self.max_attempts)


class SequentialIdAllocator:
    """Hand out ``<prefix><number>`` IDs from a shared counter.

    Two successful calls always return two different IDs. A failed call
    raises :class:`AllocationFailedError` and leaves the counter untouched.
    """

    def __init__(
        self,
        store: CounterStore,
        *,
        counter_name: str = PARTICIPANT_COUNTER,
        starting_id: int = STARTING_ID,
        prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self.store = store
        self.counter_name = counter_name
        self.starting_id = starting_id
        self.prefix = prefix

    def _next(self, current: int | None) -> int:
        return (self.starting_id if current is None else current) + 1

    def allocate(self) -> str:
        """Commit the next counter value and return it as a formatted ID."""
        try:
            number = self.store.run_transaction(self.counter_name, self._next)
        except (CounterConflictError, SQLAlchemyError) as err:
            logger.error("Participant ID allocation failed: %s", err)
            raise AllocationFailedError("Could not allocate a participant ID") from err
        participant_id = f"{self.prefix}{number}"
        logger.info("Allocated participant ID %s", participant_id)
        return participant_id


def get_participant_id_allocator(session: Session) -> SequentialIdAllocator:
    """Build the allocator configured from settings for ``session``."""
    return SequentialIdAllocator(
        SqlCounterStore(session),
        counter_name=settings.participant_counter_name,
        starting_id=settings.participant_id_start,
        prefix=settings.participant_id_prefix,
    )
