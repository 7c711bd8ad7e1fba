"""Queue Lifecycle — create, inspect, list, and delete queues.

Invariants:
    - Every route requires a verified identity
    - The creator is enrolled in the queue they create (QueueService guarantees it)
    - DELETE is organizer-only and returns 204 once queue and entries are gone
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from waitlist.api.deps import get_current_identity, get_queue_service
from waitlist.core.domain_types import QueueId, UserId
from waitlist.schemas.queue import QueueCreate, QueueResponse
from waitlist.services.queue_service import QueueService

router = APIRouter(prefix="/api/v1/queues", tags=["queues"])


@router.post(
    "", response_model=QueueResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_queue(
    body: QueueCreate,
    identity: UserId = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
):
    """Create a queue; the caller joins it and, by default, organizes it."""
    queue = await service.create_queue(
        identity,
        name=body.name,
        description=body.description,
        claim_organizer=body.add_organizer,
    )
    return QueueResponse.from_record(queue)


@router.get("", response_model=list[QueueResponse])
async def my_queues(
    identity: UserId = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
):
    """Queues the caller is currently a member of."""
    queues = await service.queues_for(identity)
    return [QueueResponse.from_record(q) for q in queues]


@router.get("/{queue_id}", response_model=QueueResponse)
async def get_queue(
    queue_id: UUID,
    identity: UserId = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
):
    queue = await service.get_queue(QueueId(queue_id))
    return QueueResponse.from_record(queue)


@router.delete("/{queue_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_queue(
    queue_id: UUID,
    identity: UserId = Depends(get_current_identity),
    service: QueueService = Depends(get_queue_service),
):
    """Delete a queue and all its entries. Organizer only."""
    await service.delete_queue(identity, QueueId(queue_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
