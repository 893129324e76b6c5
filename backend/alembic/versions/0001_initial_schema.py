"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates the events table: published listing fields plus the
pending-change envelope used by moderation.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

pending_action = sa.Enum("create", "update", "delete", name="pendingaction")


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("distance", sa.String(100), nullable=True),
        sa.Column("organizer", sa.String(255), nullable=True),
        sa.Column("registration_deadline", sa.Date, nullable=True),
        sa.Column("registration_link", sa.String(500), nullable=True),
        sa.Column("is_approved", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("pending_action", pending_action, nullable=True),
        sa.Column("pending_data", sa.JSON, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("requested_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_events_is_approved_date", "events", ["is_approved", "date"])
    op.create_index("ix_events_pending_action_requested_at", "events", ["pending_action", "requested_at"])


def downgrade() -> None:
    op.drop_index("ix_events_pending_action_requested_at", table_name="events")
    op.drop_index("ix_events_is_approved_date", table_name="events")
    op.drop_table("events")
    pending_action.drop(op.get_bind(), checkfirst=True)
