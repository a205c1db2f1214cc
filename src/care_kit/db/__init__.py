# src/care_kit/db/__init__.py
"""Database configuration and utilities."""

from .session import SessionLocal, get_db

__all__ = ["get_db", "SessionLocal"]
