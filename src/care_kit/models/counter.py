# src/care_kit/models/counter.py
"""System-level bookkeeping models."""

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from care_kit.db.session import Base


class Counter(Base):
    """Named monotonic counter shared by every process.

    Rows are only ever advanced through a compare-and-swap on ``count``.
    """

    __tablename__ = "counters"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    count: Mapped[int] = mapped_column(BigInteger, nullable=False)
