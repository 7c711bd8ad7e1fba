"""Health Probes — liveness and database readiness for the waitlist API.

Invariants:
    - Liveness never touches the database
    - Readiness is 503 whenever no session manager exists or SELECT 1 fails
    - Neither probe requires a bearer token
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

import waitlist.infrastructure.database as db_module
from waitlist.api.deps import get_queue_locks
from waitlist.infrastructure.queue_locks import QueueLocks

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/")
async def liveness(locks: QueueLocks = Depends(get_queue_locks)):
    return {"status": "healthy", "service": "waitlist-api", "queues_locked": len(locks)}


@router.get("/ready")
async def readiness():
    manager = db_module.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": {"database": "unavailable"}},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
