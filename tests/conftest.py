from __future__ import annotations

import os

# Cheap Argon2 parameters and a fixed secret for the whole test run.
os.environ.setdefault("ARGON2_MEMORY_COST_KIB", "1024")
os.environ.setdefault("ARGON2_PARALLELISM", "1")
os.environ.setdefault("JWT_SECRET", "test-secret")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from days.api import deps  # noqa: E402
from days.db.base import Base  # noqa: E402
from days.main import app  # noqa: E402
from days.models import *  # noqa: E402,F401,F403
from tests.fakes import InMemoryStore, build_repositories  # noqa: E402


TEST_DB_URL = os.getenv("TEST_DATABASE_URL")


@pytest.fixture(scope="session")
def integration_enabled() -> bool:
    return bool(TEST_DB_URL)


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def repos(store: InMemoryStore) -> deps.Repositories:
    return build_repositories(store)


@pytest.fixture()
async def api_client(repos: deps.Repositories):
    async def override_repositories() -> deps.Repositories:
        return repos

    app.dependency_overrides[deps.get_repositories] = override_repositories

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()



@pytest.fixture()
async def engine(integration_enabled: bool):
    if not integration_enabled:
        yield None
        return

    engine = create_async_engine(TEST_DB_URL, future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
async def db_session(engine, integration_enabled: bool) -> AsyncGenerator[AsyncSession, None]:
    if not integration_enabled:
        pytest.skip("Integration env is not configured")

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture()
async def db_app_client(engine, integration_enabled: bool):
    if not integration_enabled:
        pytest.skip("Integration env is not configured")

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[deps.get_db_session] = override_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
