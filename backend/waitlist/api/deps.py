"""API Dependencies — identity gate, queue locks, and QueueService wiring.

Invariants:
    - Every authenticated route resolves the caller through get_current_identity
    - The identity verifier and queue lock registry are process-scoped (lru_cache)
    - QueueService is request-scoped: one per request, bound to the request's session
"""

from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist.config import get_settings
from waitlist.core.domain_types import UserId
from waitlist.core.errors import UnauthorizedError
from waitlist.core.repository_protocols import IdentityVerifier
from waitlist.infrastructure.database import get_db
from waitlist.infrastructure.identity import JwtIdentityVerifier
from waitlist.infrastructure.queue_locks import QueueLocks
from waitlist.services.queue_service import QueueService

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


@lru_cache
def get_identity_verifier() -> IdentityVerifier:
    settings = get_settings()
    return JwtIdentityVerifier(settings.jwt_secret_key, settings.jwt_algorithm)


@lru_cache
def get_queue_locks() -> QueueLocks:
    return QueueLocks()


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> UserId:
    """Resolve the caller's identity. Raises 401 if missing or invalid."""
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")
    return verifier.verify(credentials.credentials)


async def get_queue_service(
    db: AsyncSession = Depends(get_db),
    locks: QueueLocks = Depends(get_queue_locks),
) -> QueueService:
    return QueueService(db, locks, horizon=get_settings().queue_horizon)
