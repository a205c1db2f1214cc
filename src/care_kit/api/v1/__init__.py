# src/care_kit/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    auth_router,
    stress_router,
    study_router,
    system_router,
)

__all__ = [
    "admin_router",
    "auth_router",
    "stress_router",
    "study_router",
    "system_router",
]
