"""Password hashing helpers built on passlib."""
from __future__ import annotations

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return a salted hash of ``password`` suitable for storage."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if ``password`` matches the stored ``password_hash``."""
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # Unrecognized or corrupted hash.
        return False
