"""Initial schema: user_snapshots, activities.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # User snapshots (one row per user)
    op.create_table(
        "user_snapshots",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("profile_completion", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("generated_content_count", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("match_count", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("active_relationship_count", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("milestone_count", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("profile_completion BETWEEN 0 AND 100", name="ck_user_snapshots_completion"),
    )
    op.create_index("ix_user_snapshots_user_id", "user_snapshots", ["user_id"], unique=True)

    # Activities (append-only)
    op.create_table(
        "activities",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("description", sa.String(500)),
        sa.Column("metadata", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("idx_activities_user_created", "activities", ["user_id", "created_at"])


def downgrade() -> None:
    op.drop_index("idx_activities_user_created", table_name="activities")
    op.drop_table("activities")
    op.drop_index("ix_user_snapshots_user_id", table_name="user_snapshots")
    op.drop_table("user_snapshots")
