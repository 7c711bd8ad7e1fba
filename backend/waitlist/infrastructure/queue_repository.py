"""Queue Registry (SQL) — QueueRepository over an AsyncSession.

Invariants:
    - Never commits: the caller's transaction decides
    - delete() removes entries and the queue in the same transaction
    - Returned timestamps are timezone-aware UTC, whatever the backend stores

Design Decisions:
    - Explicit bulk delete of entries before the queue row: SQLite does not
      enforce ON DELETE CASCADE unless foreign keys are switched on, and the
      result must be identical on both backends
    - lock() uses SELECT ... FOR UPDATE; dialects without row locks ignore it
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist.core.domain_types import QueueId, UserId
from waitlist.core.records import QueueRecord
from waitlist.models.queue import Queue
from waitlist.models.queue_entry import QueueEntry


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_queue_record(queue: Queue) -> QueueRecord:
    return QueueRecord(
        id=QueueId(queue.id),
        name=queue.name,
        description=queue.description,
        organizer_id=(
            UserId(queue.organizer_id) if queue.organizer_id is not None else None
        ),
        created_at=as_utc(queue.created_at),
        expires_at=as_utc(queue.expires_at),
    )


class SqlQueueRepository:
    """Queue persistence on the `queues` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        name: str,
        description: str,
        organizer_id: UserId | None,
        horizon: timedelta,
        now: datetime,
    ) -> QueueRecord:
        queue = Queue(
            name=name,
            description=description,
            organizer_id=organizer_id,
            created_at=now,
            expires_at=now + horizon,
        )
        self.db.add(queue)
        await self.db.flush()
        return to_queue_record(queue)

    async def get(self, queue_id: QueueId) -> QueueRecord | None:
        result = await self.db.execute(
            select(Queue).where(Queue.id == queue_id),
        )
        queue = result.scalar_one_or_none()
        return to_queue_record(queue) if queue else None

    async def lock(self, queue_id: QueueId) -> QueueRecord | None:
        result = await self.db.execute(
            select(Queue).where(Queue.id == queue_id).with_for_update(),
        )
        queue = result.scalar_one_or_none()
        return to_queue_record(queue) if queue else None

    async def delete(self, queue_id: QueueId) -> None:
        await self.db.execute(
            delete(QueueEntry).where(QueueEntry.queue_id == queue_id),
        )
        await self.db.execute(
            delete(Queue).where(Queue.id == queue_id),
        )

    async def list_for_member(self, user_id: UserId) -> list[QueueRecord]:
        result = await self.db.execute(
            select(Queue)
            .join(QueueEntry, QueueEntry.queue_id == Queue.id)
            .where(QueueEntry.user_id == user_id)
            .order_by(Queue.created_at, Queue.id),
        )
        return [to_queue_record(q) for q in result.scalars().all()]
