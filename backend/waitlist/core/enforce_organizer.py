"""Organizer Enforcement — permission rule for organizer-only actions.

Invariants:
    - PURE: no IO, no async, no DB
    - A queue without an organizer denies every organizer-only action, forever
    - organizer_id is compared by identity only; nothing about the caller is inspected
"""

from waitlist.core.domain_types import UserId
from waitlist.core.errors import ForbiddenError
from waitlist.core.records import QueueRecord


def is_organizer(queue: QueueRecord, identity: UserId) -> bool:
    return queue.organizer_id is not None and queue.organizer_id == identity


def check_organizer(queue: QueueRecord, identity: UserId, action: str) -> None:
    """Raise ForbiddenError unless identity organizes the queue."""
    if not is_organizer(queue, identity):
        raise ForbiddenError(action, queue.id, identity)
