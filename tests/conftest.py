"""Pytest configuration and fixtures for passage-search.

Environment is pinned before the app is imported: in-memory SQLite, no
startup seeding. Repository and API tests share one in-memory database per
test (StaticPool), seeded with the sample corpus.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["DATABASE_AUTO_CREATE"] = "false"
os.environ["TELEMETRY_ENABLED"] = "false"

from collections.abc import AsyncIterator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from passage_search.core.config import get_settings  # noqa: E402
from passage_search.core.limiter import limiter  # noqa: E402
from passage_search.infrastructure.persistence.database import (  # noqa: E402
    create_schema,
    get_db,
)
from passage_search.infrastructure.persistence.seed import DatabaseSeeder  # noqa: E402
from passage_search.infrastructure.resilience import (  # noqa: E402
    ResilienceService,
    get_resilience_service,
)
from passage_search.main import app  # noqa: E402
from tests.support import make_resilience  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
def resilience() -> ResilienceService:
    return make_resilience()


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite engine with the schema created (one connection shared)."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def seeded(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Load the built-in sample corpus (5 sections, 22 passages)."""
    async with session_factory() as session:
        await DatabaseSeeder(session).seed()


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Database session for repository/integration tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    resilience: ResilienceService,
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI) backed by the test database."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_resilience_service] = lambda: resilience
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
