"""Integration test fixtures for database and HTTP client operations.

The app runs against an in-memory SQLite database (schema created from the
SQLModel metadata) and an in-memory identity provider. Uses polyfactory for
type-safe test data generation.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import src.app.models  # noqa: F401 - registers tables on the metadata
from src.app.api.dependencies import get_identity_provider
from src.app.core.health import reset_health_cache
from src.app.main import create_app
from src.app.models import Organization, OrgJoinCode, User, UserRole
from tests.factories import OrganizationFactory, OrgJoinCodeFactory, UserFactory
from tests.helpers import FakeIdentityProvider

pytestmark = pytest.mark.integration


@pytest.fixture
async def engine(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[AsyncEngine]:
    """Create a fresh database and install it as the app engine."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    monkeypatch.setattr("src.app.core.db.engine._engine", test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions for seeding and inspecting data outside of requests.

    Tests must explicitly call `await session.commit()` to persist changes.
    """
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def client(
    engine: AsyncEngine, fake_identity: FakeIdentityProvider
) -> AsyncGenerator[AsyncClient]:
    """Create test client wired to the test database and fake identity provider."""
    reset_health_cache()
    app = create_app()
    app.dependency_overrides[get_identity_provider] = lambda: fake_identity
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client
    reset_health_cache()


@pytest.fixture
async def test_org(session_factory: async_sessionmaker[AsyncSession]) -> Organization:
    """An existing organization with an owner profile."""
    async with session_factory() as session:
        org = OrganizationFactory.build()
        session.add(org)
        await session.commit()
    return org


@pytest.fixture
async def test_owner(
    session_factory: async_sessionmaker[AsyncSession], test_org: Organization
) -> User:
    async with session_factory() as session:
        owner = UserFactory.onboarded_into(test_org.id, role=UserRole.SUPER_ADMIN)
        session.add(owner)
        await session.commit()
    return owner


@pytest.fixture
async def test_join_code(
    session_factory: async_sessionmaker[AsyncSession],
    test_org: Organization,
    test_owner: User,
) -> OrgJoinCode:
    """A valid invite code for test_org."""
    async with session_factory() as session:
        join_code = OrgJoinCodeFactory.build(org_id=test_org.id, created_by=test_owner.id)
        session.add(join_code)
        await session.commit()
    return join_code
