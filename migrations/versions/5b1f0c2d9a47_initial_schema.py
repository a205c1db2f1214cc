"""initial schema

Revision ID: 5b1f0c2d9a47
Revises:
Create Date: 2025-01-06 09:12:40.512233

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b1f0c2d9a47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create participant, counter and stress record tables."""
    op.create_table(
        "counters",
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("count", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("name"),
    )
    op.create_table(
        "participant",
        sa.Column("uid", sa.String(length=32), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("participant_id", sa.String(length=32), nullable=False),
        sa.Column("memorable_code_word", sa.Text(), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("timezone", sa.String(length=64), nullable=False),
        sa.Column("study_start_date", sa.String(length=40), nullable=False),
        sa.Column("has_completed_study", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("uid"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("participant_id"),
    )
    op.create_table(
        "stress_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("creator_id", sa.String(length=32), nullable=False),
        sa.Column("affirmation_type", sa.String(length=16), nullable=False),
        sa.Column("affirmation", sa.Text(), nullable=False),
        sa.Column("affirmation_index", sa.Integer(), nullable=False),
        sa.Column("study_day", sa.Integer(), nullable=False),
        sa.Column("stress_before", sa.Integer(), nullable=False),
        sa.Column("stress_after", sa.Integer(), nullable=False),
        sa.Column("timestamp", sa.String(length=40), nullable=False),
        sa.Column("flow_start_time", sa.String(length=40), nullable=False),
        sa.Column("affirmation_start_time", sa.String(length=40), nullable=False),
        sa.Column("affirmation_end_time", sa.String(length=40), nullable=False),
        sa.Column("flow_end_time", sa.String(length=40), nullable=False),
        sa.Column("affirmation_duration_seconds", sa.Integer(), nullable=False),
        sa.Column("total_flow_duration_seconds", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["creator_id"], ["participant.uid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_stress_records_creator_id", "stress_records", ["creator_id"], unique=False
    )
    op.create_index(
        "ix_stress_records_timestamp", "stress_records", ["timestamp"], unique=False
    )


def downgrade() -> None:
    """Drop all Care Kit tables."""
    op.drop_index("ix_stress_records_timestamp", table_name="stress_records")
    op.drop_index("ix_stress_records_creator_id", table_name="stress_records")
    op.drop_table("stress_records")
    op.drop_table("participant")
    op.drop_table("counters")
