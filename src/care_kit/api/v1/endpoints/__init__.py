# src/care_kit/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .auth import router as auth_router
from .stress import router as stress_router
from .study import router as study_router
from .system import router as system_router

__all__ = [
    "admin_router",
    "auth_router",
    "stress_router",
    "study_router",
    "system_router",
]
