"""Initial schema — queues and queue_entries.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

queue_entries uses (queue_id, user_id) as its primary key so the database
itself rejects a second entry for the same user in the same queue.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "queues",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("organizer_id", UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "queue_entries",
        sa.Column(
            "queue_id", UUID(as_uuid=True),
            sa.ForeignKey("queues.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("user_id", UUID(as_uuid=True), primary_key=True),
        sa.Column("has_priority", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("is_held", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_queue_entries_user_id", "queue_entries", ["user_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_queue_entries_user_id", table_name="queue_entries")
    op.drop_table("queue_entries")
    op.drop_table("queues")
