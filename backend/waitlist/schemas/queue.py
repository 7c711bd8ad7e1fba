"""Queue Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - QueueCreate.name: 1-100 chars after stripping, non-empty
    - QueueCreate.add_organizer defaults to True (creator becomes organizer)
    - MemberFlagsUpdate must change at least one flag
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from waitlist.core.records import QueueRecord, RankedMember


class QueueCreate(BaseModel):
    """Queue creation — validates name length and whitespace."""
    name: str = Field(min_length=1, max_length=100)
    description: str = Field("", max_length=2000)
    add_organizer: bool = True

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class QueueResponse(BaseModel):
    """Queue response — public-facing queue data."""
    id: UUID
    name: str
    description: str
    organizer_id: UUID | None = None
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_record(cls, queue: QueueRecord) -> "QueueResponse":
        return cls(
            id=queue.id,
            name=queue.name,
            description=queue.description,
            organizer_id=queue.organizer_id,
            created_at=queue.created_at,
            expires_at=queue.expires_at,
        )


class MemberResponse(BaseModel):
    """One ranked member of a queue."""
    user_id: UUID
    order: int
    has_priority: bool
    is_held: bool
    joined_at: datetime

    @classmethod
    def from_ranked(cls, member: RankedMember) -> "MemberResponse":
        return cls(
            user_id=member.user_id,
            order=member.order,
            has_priority=member.has_priority,
            is_held=member.is_held,
            joined_at=member.joined_at,
        )


class MemberFlagsUpdate(BaseModel):
    """Organizer edit of a member's priority/hold flags."""
    has_priority: bool | None = None
    is_held: bool | None = None

    @model_validator(mode="after")
    def require_one_flag(self):
        if self.has_priority is None and self.is_held is None:
            raise ValueError("provide has_priority and/or is_held")
        return self
