"""Queue Service — permissions, atomic mutations, and ranked reads for waitlists.

Invariants:
    - Every mutation runs in exactly one transaction: it commits fully or rolls back fully
    - Mutations of an existing queue hold that queue's lock (in-process) and its
      row lock (in the database) from the existence check through commit
    - A creator is always enrolled in their own queue, joined at created_at
    - Only the organizer may delete a queue or change member flags; an
      ownerless queue can never be deleted
    - Reads take no lock and may observe a slightly stale snapshot

Design Decisions:
    - The clock is injected so join order is reproducible in tests
    - Repositories built from the request's AsyncSession, like every handler
      in this package; QueueLocks is process-scoped and passed in
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist.core.domain_types import DEFAULT_QUEUE_HORIZON, QueueId, UserId
from waitlist.core.enforce_organizer import check_organizer
from waitlist.core.errors import NotMemberError, QueueNotFoundError
from waitlist.core.ranking import position_of, rank_members
from waitlist.core.records import QueueRecord, RankedMember
from waitlist.infrastructure.database import translate_db_error
from waitlist.infrastructure.membership_repository import SqlMembershipRepository
from waitlist.infrastructure.queue_locks import QueueLocks
from waitlist.infrastructure.queue_repository import SqlQueueRepository

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QueueService:
    """Orchestrates queue lifecycle and membership for one request."""

    def __init__(
        self,
        db: AsyncSession,
        locks: QueueLocks,
        horizon: timedelta = DEFAULT_QUEUE_HORIZON,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.locks = locks
        self.horizon = horizon
        self.clock = clock
        self.registry = SqlQueueRepository(db)
        self.ledger = SqlMembershipRepository(db)

    # ─── Transactions ───────────────────────────────────────────

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[None]:
        try:
            yield
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise translate_db_error(e) from e
        except BaseException:
            await self.db.rollback()
            raise

    @asynccontextmanager
    async def _reading(self) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise translate_db_error(e) from e

    @asynccontextmanager
    async def _exclusive(self, queue_id: QueueId) -> AsyncIterator[None]:
        async with self.locks.hold(queue_id), self._transaction():
            yield

    async def _require_queue(self, queue_id: QueueId, *, for_update: bool = False) -> QueueRecord:
        if for_update:
            queue = await self.registry.lock(queue_id)
        else:
            queue = await self.registry.get(queue_id)
        if queue is None:
            raise QueueNotFoundError(queue_id)
        return queue

    # ─── Queue lifecycle ────────────────────────────────────────

    async def create_queue(
        self,
        identity: UserId,
        name: str,
        description: str,
        claim_organizer: bool,
    ) -> QueueRecord:
        """Create a queue and enroll its creator as the first standard member."""
        now = self.clock()
        async with self._transaction():
            queue = await self.registry.create(
                name=name,
                description=description,
                organizer_id=identity if claim_organizer else None,
                horizon=self.horizon,
                now=now,
            )
            await self.ledger.add(queue.id, identity, joined_at=queue.created_at)
        logger.info(
            f"Queue created: {queue.name!r}",
            extra={"queue_id": str(queue.id), "user_id": str(identity)},
        )
        return queue

    async def delete_queue(self, identity: UserId, queue_id: QueueId) -> None:
        """Delete a queue and every entry in it. Organizer only."""
        async with self._exclusive(queue_id):
            queue = await self._require_queue(queue_id, for_update=True)
            check_organizer(queue, identity, "delete the queue")
            await self.registry.delete(queue_id)
        logger.info(
            "Queue deleted",
            extra={"queue_id": str(queue_id), "user_id": str(identity)},
        )

    async def get_queue(self, queue_id: QueueId) -> QueueRecord:
        async with self._reading():
            return await self._require_queue(queue_id)

    async def queues_for(self, identity: UserId) -> list[QueueRecord]:
        """Queues in which identity currently holds an entry."""
        async with self._reading():
            return await self.registry.list_for_member(identity)

    # ─── Membership ─────────────────────────────────────────────

    async def join(
        self, identity: UserId, queue_id: QueueId, has_priority: bool = False,
    ) -> None:
        """Add identity to the queue, joined now. No capacity limit."""
        async with self._exclusive(queue_id):
            await self._require_queue(queue_id, for_update=True)
            await self.ledger.add(
                queue_id, identity,
                joined_at=self.clock(),
                has_priority=has_priority,
            )
        logger.info(
            "Member joined",
            extra={"queue_id": str(queue_id), "user_id": str(identity)},
        )

    async def leave(self, identity: UserId, queue_id: QueueId) -> None:
        """Remove identity from the queue; NotMemberError if it holds no entry."""
        async with self._exclusive(queue_id):
            if await self.registry.lock(queue_id) is None:
                raise NotMemberError(queue_id, identity)
            await self.ledger.remove(queue_id, identity)
        logger.info(
            "Member left",
            extra={"queue_id": str(queue_id), "user_id": str(identity)},
        )

    async def members(self, queue_id: QueueId) -> list[RankedMember]:
        """Ranked members of a queue, recomputed from the current ledger."""
        async with self._reading():
            await self._require_queue(queue_id)
            entries = await self.ledger.list_entries(queue_id)
        return rank_members(entries)

    async def member(self, queue_id: QueueId, user_id: UserId) -> RankedMember:
        """One member's ranked position."""
        ranked = await self.members(queue_id)
        found = position_of(ranked, user_id)
        if found is None:
            raise NotMemberError(queue_id, user_id)
        return found

    async def set_member_flags(
        self,
        identity: UserId,
        queue_id: QueueId,
        user_id: UserId,
        has_priority: bool | None = None,
        is_held: bool | None = None,
    ) -> RankedMember:
        """Change a member's priority/hold flags. Organizer only."""
        async with self._exclusive(queue_id):
            queue = await self._require_queue(queue_id, for_update=True)
            check_organizer(queue, identity, "change member flags")
            await self.ledger.update_flags(
                queue_id, user_id, has_priority=has_priority, is_held=is_held,
            )
            ranked = rank_members(await self.ledger.list_entries(queue_id))
        found = position_of(ranked, user_id)
        logger.info(
            f"Member flags updated (priority={found.has_priority}, held={found.is_held})",
            extra={
                "queue_id": str(queue_id),
                "user_id": str(user_id),
                "order": found.order,
            },
        )
        return found
