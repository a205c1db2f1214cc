"""Business logic services for the Care Kit application."""

from .participant_ids import AllocationFailedError, SequentialIdAllocator, SqlCounterStore
from .study_calendar import affirmation_index, has_completed_seven_days, study_day

__all__ = [
    "AllocationFailedError",
    "SequentialIdAllocator",
    "SqlCounterStore",
    "affirmation_index",
    "has_completed_seven_days",
    "study_day",
]
