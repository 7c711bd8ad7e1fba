"""Per-Queue Locks — in-process mutual exclusion keyed by queue_id.

Invariants:
    - Two tasks holding the same queue_id never overlap
    - Different queues never share a lock
    - A lock is discarded once no task holds or awaits it (registry does not grow
      with the number of queues ever touched)

Design Decisions:
    - Complements the SELECT ... FOR UPDATE row lock: the row lock serializes
      across processes on PostgreSQL, this serializes within one process on any
      backend (SQLite ignores FOR UPDATE)
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID


class QueueLocks:
    """Registry of asyncio.Lock objects, one per contended queue."""

    def __init__(self):
        self._locks: dict[UUID, asyncio.Lock] = {}
        self._users: dict[UUID, int] = {}

    @asynccontextmanager
    async def hold(self, queue_id: UUID) -> AsyncIterator[None]:
        lock = self._locks.get(queue_id)
        if lock is None:
            lock = self._locks[queue_id] = asyncio.Lock()
            self._users[queue_id] = 0
        self._users[queue_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._users[queue_id] -= 1
            if self._users[queue_id] == 0:
                del self._users[queue_id]
                del self._locks[queue_id]

    def is_locked(self, queue_id: UUID) -> bool:
        lock = self._locks.get(queue_id)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)
