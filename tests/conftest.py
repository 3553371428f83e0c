"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from todoapi.api.dependencies import get_category_repository, get_todo_repository
from todoapi.database import enable_sqlite_foreign_keys, get_db
from todoapi.main import create_app
from todoapi.models import Base

from fakes import InMemoryCategoryRepository, InMemoryStore, InMemoryTodoRepository


@pytest.fixture
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_session(session_maker):
    """Create a test database session."""
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    """Create a test client backed by the SQLite test database."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
async def fake_client(store):
    """Create a test client whose repositories are in-memory fakes."""
    app = create_app()
    app.dependency_overrides[get_category_repository] = lambda: InMemoryCategoryRepository(store)
    app.dependency_overrides[get_todo_repository] = lambda: InMemoryTodoRepository(store)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
