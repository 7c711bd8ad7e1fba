"""Queue Membership — join, leave, ranked listing, and organizer flag edits.

Invariants:
    - Join and leave always act on the caller; nobody can enroll someone else
    - Listings are ranked on every request; order is never cached
    - PATCH is organizer-only
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from waitlist.api.deps import get_current_identity, get_queue_service
from waitlist.core.domain_types import QueueId, UserId
from waitlist.schemas.queue import MemberFlagsUpdate, MemberResponse
from waitlist.services.queue_service import QueueService

router = APIRouter(prefix="/api/v1/queues/{queue_id}/members", tags=["members"])


@router.get("", response_model=list[MemberResponse])
async def list_members(
    queue_id: UUID,
    identity: UserId = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
):
    """Members in serving order."""
    ranked = await service.members(QueueId(queue_id))
    return [MemberResponse.from_ranked(m) for m in ranked]


@router.post("", status_code=status.HTTP_204_NO_CONTENT)
async def join_queue(
    queue_id: UUID,
    identity: UserId = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
):
    await service.join(identity, QueueId(queue_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def leave_queue(
    queue_id: UUID,
    identity: UserId = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
):
    await service.leave(identity, QueueId(queue_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}", response_model=MemberResponse)
async def get_member(
    queue_id: UUID,
    user_id: UUID,
    identity: UserId = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
):
    member = await service.member(QueueId(queue_id), UserId(user_id))
    return MemberResponse.from_ranked(member)


@router.patch("/{user_id}", response_model=MemberResponse)
async def update_member_flags(
    queue_id: UUID,
    user_id: UUID,
    body: MemberFlagsUpdate,
    identity: UserId = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
):
    """Set priority and/or hold on a member. Organizer only."""
    member = await service.set_member_flags(
        identity,
        QueueId(queue_id),
        UserId(user_id),
        has_priority=body.has_priority,
        is_held=body.is_held,
    )
    return MemberResponse.from_ranked(member)
