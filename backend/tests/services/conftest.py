"""Service test fixtures — async DB, ticking clock, tokens, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_queue_service overridden so routes share the test DB and clock
    - db_manager patched for the readiness probe, which bypasses get_db
    - Clock ticks one minute per call: join order is deterministic

Design Decisions:
    - SQLite in-memory with StaticPool: every session sees the same database
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest
from fastapi import Depends
from jose import jwt
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from waitlist.api.deps import get_queue_service
from waitlist.config import get_settings
from waitlist.db.base import Base
from waitlist.infrastructure.database import get_db, DatabaseSessionManager
from waitlist.infrastructure.queue_locks import QueueLocks
from waitlist.services.queue_service import QueueService
import waitlist.infrastructure.database as db_module
from waitlist.main import app


class TickingClock:
    """Returns a strictly increasing UTC timestamp on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(minutes=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        return now


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return TickingClock(datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def locks():
    return QueueLocks()


@pytest.fixture
def service(test_db, locks, clock):
    return QueueService(test_db, locks, clock=clock)


@pytest.fixture
async def make_service(test_session_factory, locks, clock):
    """Build services on independent sessions, as concurrent requests would."""
    sessions = []

    def _make() -> QueueService:
        session = test_session_factory()
        sessions.append(session)
        return QueueService(session, locks, clock=clock)

    yield _make
    for session in sessions:
        await session.close()


@pytest.fixture
def alice() -> UUID:
    return uuid4()


@pytest.fixture
def bob() -> UUID:
    return uuid4()


@pytest.fixture
def carol() -> UUID:
    return uuid4()


@pytest.fixture
def auth_headers():
    """Mint bearer headers the way the credential service would."""
    settings = get_settings()

    def _headers(user_id: UUID, token_type: str = "access") -> dict:
        token = jwt.encode(
            {
                "sub": str(user_id),
                "type": token_type,
                "exp": datetime.now(timezone.utc) + timedelta(hours=1),
            },
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
async def client(test_engine, test_session_factory, locks, clock):
    """FastAPI test client with DB and service dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    async def override_get_queue_service(
        db: AsyncSession = Depends(get_db),
    ) -> QueueService:
        return QueueService(db, locks, clock=clock)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_queue_service] = override_get_queue_service

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
