"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Repositories never commit; the caller owns the transaction

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: storage implementations do IO; the ranking engine that
      consumes their snapshots stays synchronous
    - IdentityVerifier is synchronous: verifying a signed token needs no IO
"""

from datetime import datetime, timedelta
from typing import Protocol

from waitlist.core.domain_types import QueueId, UserId
from waitlist.core.records import MembershipEntry, QueueRecord


class IdentityVerifier(Protocol):
    """Identity gate — turns a credential into a stable subject id or raises UnauthorizedError."""
    def verify(self, credential: str) -> UserId: ...


class QueueRepository(Protocol):
    """Queue registry — implemented by shell."""
    async def create(
        self,
        name: str,
        description: str,
        organizer_id: UserId | None,
        horizon: timedelta,
        now: datetime,
    ) -> QueueRecord: ...
    async def get(self, queue_id: QueueId) -> QueueRecord | None: ...
    async def lock(self, queue_id: QueueId) -> QueueRecord | None: ...
    async def delete(self, queue_id: QueueId) -> None: ...
    async def list_for_member(self, user_id: UserId) -> list[QueueRecord]: ...


class MembershipRepository(Protocol):
    """Membership ledger — implemented by shell."""
    async def add(
        self,
        queue_id: QueueId,
        user_id: UserId,
        joined_at: datetime,
        has_priority: bool = False,
        is_held: bool = False,
    ) -> MembershipEntry: ...
    async def remove(self, queue_id: QueueId, user_id: UserId) -> None: ...
    async def get(
        self, queue_id: QueueId, user_id: UserId,
    ) -> MembershipEntry | None: ...
    async def list_entries(self, queue_id: QueueId) -> list[MembershipEntry]: ...
    async def update_flags(
        self,
        queue_id: QueueId,
        user_id: UserId,
        has_priority: bool | None = None,
        is_held: bool | None = None,
    ) -> MembershipEntry: ...
