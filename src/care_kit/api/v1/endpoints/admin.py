# src/care_kit/api/v1/endpoints/admin.py
"""Researcher export endpoints (admin role only)."""

from __future__ import annotations

from fastapi import APIRouter

from care_kit.api.v1.dependencies import AdminUserDep, SessionDep
from care_kit.schemas.admin import AdminStressRow, AdminUser
from care_kit.services import admin_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=list[AdminUser])
async def list_users(admin: AdminUserDep, db: SessionDep) -> list[AdminUser]:
    """Return all accounts sorted by code word, then e-mail."""
    return [AdminUser.model_validate(user) for user in admin_service.get_all_users(db)]


@router.get("/users/completed", response_model=list[AdminUser])
async def list_completed_users(admin: AdminUserDep, db: SessionDep) -> list[AdminUser]:
    """Return participants who have finished the study."""
    return [
        AdminUser.model_validate(user)
        for user in admin_service.get_completed_study_users(db)
    ]


@router.get("/stress-data", response_model=list[AdminStressRow])
async def export_stress_data(admin: AdminUserDep, db: SessionDep) -> list[AdminStressRow]:
    """Return every stress record with study day and affirmation number."""
    return admin_service.get_all_stress_data(db)
