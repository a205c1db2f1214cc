"""Shared API dependencies for authentication and common functionality."""

from datetime import datetime
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from care_kit.core.settings import settings
from care_kit.db.session import get_db
from care_kit.db.time import utcnow
from care_kit.models import User
from care_kit.services.participant_ids import (
    SequentialIdAllocator,
    get_participant_id_allocator,
)

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_now() -> datetime:
    """Return the request's notion of "now" (overridden in tests)."""
    return utcnow()


NowDep = Annotated[datetime, Depends(get_now)]


def get_allocator(db: SessionDep) -> SequentialIdAllocator:
    """Get the participant ID allocator bound to the request session."""
    return get_participant_id_allocator(db)


AllocatorDep = Annotated[SequentialIdAllocator, Depends(get_allocator)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    subject = payload.get("sub")
    if subject is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    user = db.query(User).filter(User.uid == subject).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_current_admin(user: CurrentUserDep) -> User:
    """Require the authenticated user to hold the admin role."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


AdminUserDep = Annotated[User, Depends(get_current_admin)]
