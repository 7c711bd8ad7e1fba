"""Queue ORM — persists the aggregate root of a waitlist.

Invariants:
    - id is UUID primary key, generated on insert
    - organizer_id is nullable and never updated after insert
    - expires_at is fixed at creation (created_at + horizon), never renewed

Design Decisions:
    - No users table: organizer_id is an opaque identity, not a foreign key
    - cascade delete for entries at both ORM and DB level (ON DELETE CASCADE)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from waitlist.db.base import Base


class Queue(Base):
    """Queue aggregate root — owns all membership entries."""
    __tablename__ = "queues"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    organizer_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )

    entries: Mapped[list["QueueEntry"]] = relationship(
        "QueueEntry", back_populates="queue",
        cascade="all, delete-orphan", passive_deletes=True,
    )
