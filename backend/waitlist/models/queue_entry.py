"""QueueEntry ORM — one user's membership in one queue.

Invariants:
    - (queue_id, user_id) is the primary key: at most one entry per user per queue
    - joined_at is set once on insert and never updated
    - No order column: serving position is derived by core/ranking.py on read

Design Decisions:
    - Composite primary key instead of surrogate id + unique constraint: the
      uniqueness rule is the identity of the row
    - Index on user_id backs the "queues I am in" lookup
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from waitlist.db.base import Base


class QueueEntry(Base):
    """Membership entry — priority/hold flags plus join time."""
    __tablename__ = "queue_entries"

    queue_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("queues.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, index=True,
    )
    has_priority: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    is_held: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )

    queue: Mapped["Queue"] = relationship("Queue", back_populates="entries")
