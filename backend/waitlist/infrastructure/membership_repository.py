"""Membership Ledger (SQL) — MembershipRepository over an AsyncSession.

Invariants:
    - Never commits: the caller's transaction decides
    - add() raises AlreadyMemberError on a duplicate (queue_id, user_id), whether
      detected by the pre-check or by the primary key at flush time
    - remove() and update_flags() raise NotMemberError when no entry exists
    - list_entries() returns an unordered snapshot; ordering belongs to core/ranking.py
"""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist.core.domain_types import QueueId, UserId
from waitlist.core.errors import AlreadyMemberError, NotMemberError
from waitlist.core.records import MembershipEntry
from waitlist.infrastructure.queue_repository import as_utc
from waitlist.models.queue_entry import QueueEntry


def to_membership_entry(entry: QueueEntry) -> MembershipEntry:
    return MembershipEntry(
        queue_id=QueueId(entry.queue_id),
        user_id=UserId(entry.user_id),
        has_priority=entry.has_priority,
        is_held=entry.is_held,
        joined_at=as_utc(entry.joined_at),
    )


class SqlMembershipRepository:
    """Entry persistence on the `queue_entries` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find(self, queue_id: QueueId, user_id: UserId) -> QueueEntry | None:
        result = await self.db.execute(
            select(QueueEntry)
            .where(QueueEntry.queue_id == queue_id)
            .where(QueueEntry.user_id == user_id),
        )
        return result.scalar_one_or_none()

    async def add(
        self,
        queue_id: QueueId,
        user_id: UserId,
        joined_at: datetime,
        has_priority: bool = False,
        is_held: bool = False,
    ) -> MembershipEntry:
        if await self._find(queue_id, user_id) is not None:
            raise AlreadyMemberError(queue_id, user_id)

        entry = QueueEntry(
            queue_id=queue_id,
            user_id=user_id,
            has_priority=has_priority,
            is_held=is_held,
            joined_at=joined_at,
        )
        self.db.add(entry)
        try:
            await self.db.flush()
        except IntegrityError as e:
            # Lost a race against another process inserting the same row
            raise AlreadyMemberError(queue_id, user_id) from e
        return to_membership_entry(entry)

    async def remove(self, queue_id: QueueId, user_id: UserId) -> None:
        result = await self.db.execute(
            delete(QueueEntry)
            .where(QueueEntry.queue_id == queue_id)
            .where(QueueEntry.user_id == user_id),
        )
        if result.rowcount == 0:
            raise NotMemberError(queue_id, user_id)

    async def get(
        self, queue_id: QueueId, user_id: UserId,
    ) -> MembershipEntry | None:
        entry = await self._find(queue_id, user_id)
        return to_membership_entry(entry) if entry else None

    async def list_entries(self, queue_id: QueueId) -> list[MembershipEntry]:
        result = await self.db.execute(
            select(QueueEntry).where(QueueEntry.queue_id == queue_id),
        )
        return [to_membership_entry(e) for e in result.scalars().all()]

    async def update_flags(
        self,
        queue_id: QueueId,
        user_id: UserId,
        has_priority: bool | None = None,
        is_held: bool | None = None,
    ) -> MembershipEntry:
        entry = await self._find(queue_id, user_id)
        if entry is None:
            raise NotMemberError(queue_id, user_id)
        if has_priority is not None:
            entry.has_priority = has_priority
        if is_held is not None:
            entry.is_held = is_held
        await self.db.flush()
        return to_membership_entry(entry)
