# src/care_kit/models/__init__.py
"""SQLAlchemy models for the Care Kit application."""

from .counter import Counter
from .stress import StressRecord
from .user import ROLE_ADMIN, ROLE_USER, User

__all__ = [
    "Counter",
    "StressRecord",
    "User", "ROLE_ADMIN", "ROLE_USER",
]
