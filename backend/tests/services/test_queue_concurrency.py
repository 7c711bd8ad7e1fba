"""Concurrent mutations — per-queue serialization of join/leave/delete.

Invariants:
    - Two simultaneous joins by the same user: exactly one succeeds
    - Join racing delete never leaves an orphaned entry
    - Locks are released and discarded after every operation
"""

import asyncio

from sqlalchemy import func, select

from waitlist.core.errors import AlreadyMemberError, QueueNotFoundError
from waitlist.models.queue_entry import QueueEntry


async def test_concurrent_duplicate_joins_admit_exactly_one(make_service, locks, alice, bob):
    queue = await make_service().create_queue(alice, "Q", "", True)

    results = await asyncio.gather(
        make_service().join(bob, queue.id),
        make_service().join(bob, queue.id),
        return_exceptions=True,
    )

    assert results.count(None) == 1
    assert sum(isinstance(r, AlreadyMemberError) for r in results) == 1
    ranked = await make_service().members(queue.id)
    assert [m.user_id for m in ranked] == [alice, bob]
    assert len(locks) == 0


async def test_concurrent_joins_of_different_users_all_land(make_service, alice):
    from uuid import uuid4
    queue = await make_service().create_queue(alice, "Q", "", True)
    users = [uuid4() for _ in range(5)]

    await asyncio.gather(*(make_service().join(u, queue.id) for u in users))

    ranked = await make_service().members(queue.id)
    assert len(ranked) == 6
    assert [m.order for m in ranked] == list(range(1, 7))


async def test_join_racing_delete_leaves_no_orphans(make_service, test_db, alice, bob):
    queue = await make_service().create_queue(alice, "Q", "", True)

    results = await asyncio.gather(
        make_service().delete_queue(alice, queue.id),
        make_service().join(bob, queue.id),
        return_exceptions=True,
    )

    assert results[0] is None
    assert results[1] is None or isinstance(results[1], QueueNotFoundError)
    count = await test_db.execute(
        select(func.count()).select_from(QueueEntry)
        .where(QueueEntry.queue_id == queue.id),
    )
    assert count.scalar_one() == 0
