"""Domain Records — immutable snapshots passed between storage and the core.

Invariants:
    - Records are frozen: the core never mutates what storage handed it
    - MembershipEntry has no `order` field; order exists only on RankedMember
    - All timestamps are timezone-aware UTC

Design Decisions:
    - Dataclasses instead of ORM objects: the ranking engine and permission
      rules stay importable without SQLAlchemy
"""

from dataclasses import dataclass
from datetime import datetime

from waitlist.core.domain_types import QueueId, UserId


@dataclass(frozen=True)
class QueueRecord:
    """A named waitlist with an optional organizer and a fixed horizon."""
    id: QueueId
    name: str
    description: str
    organizer_id: UserId | None
    created_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class MembershipEntry:
    """One user's participation record in one queue."""
    queue_id: QueueId
    user_id: UserId
    has_priority: bool
    is_held: bool
    joined_at: datetime


@dataclass(frozen=True)
class RankedMember:
    """A membership entry projected onto its 1-based serving position."""
    user_id: UserId
    order: int
    has_priority: bool
    is_held: bool
    joined_at: datetime
