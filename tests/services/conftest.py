"""Service test fixtures — async DB, fake collaborators and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db, get_object_storage and get_clock overridden for route tests
    - Time only moves when a test advances the FakeClock
    - Two profiles (alice, bob) seeded for every test that asks for them

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for repository
      and route tests (no PostgreSQL-specific features exercised)
    - Real SessionCodec with the test secret: routes see genuinely signed tokens
"""

from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from pinboard.api.dependencies import (
    get_clock, get_object_storage, get_session_codec,
)
from pinboard.core.domain_types import UserId
from pinboard.core.pin_types import SessionContext
from pinboard.db.base import Base
from pinboard.infrastructure.database import get_db, DatabaseSessionManager
import pinboard.infrastructure.database as db_module
from pinboard.main import app
from pinboard.models.profile import Profile
from pinboard.services.pin_repository import PinRepository
from pinboard.services.profile_repository import ProfileRepository
from tests.services.fakes import T0, FakeClock, FakeObjectStorage


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
    return FakeClock(T0)


@pytest.fixture
def storage():
    return FakeObjectStorage()


@pytest.fixture
def pin_repo(test_db, clock):
    return PinRepository(test_db, clock)


@pytest.fixture
def profile_repo(test_db):
    return ProfileRepository(test_db)


async def _seed_profile(db, username: str) -> Profile:
    profile = Profile(id=uuid4(), username=username, email=f"{username}@example.com")
    db.add(profile)
    await db.commit()
    return profile


@pytest.fixture
async def alice(test_db) -> SessionContext:
    profile = await _seed_profile(test_db, "alice")
    return SessionContext(user_id=UserId(profile.id), username="alice")


@pytest.fixture
async def bob(test_db) -> SessionContext:
    profile = await _seed_profile(test_db, "bob")
    return SessionContext(user_id=UserId(profile.id), username="bob")


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a SessionContext."""
    def _headers(session: SessionContext) -> dict[str, str]:
        token = get_session_codec().issue(session)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
async def client(test_engine, test_session_factory, storage, clock):
    """FastAPI test client with DB, storage and clock overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_object_storage] = lambda: storage
    app.dependency_overrides[get_clock] = lambda: clock

    # Readiness probe reads db_manager directly
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
