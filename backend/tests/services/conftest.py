"""Service test fixtures — async DB, FastAPI test client, in-memory repository.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_settings overridden per test: inactive visibility in location search is explicit
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (StaticPool keeps one connection so every session sees the same database)
    - InMemoryMesaRepository for lifecycle tests: rules exercised without SQL
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from app.config import Settings, get_settings
from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.services.mesa_lifecycle import MesaLifecycleService
import app.infrastructure.database as db_module
from app.main import app

from tests.services.fake_repository import InMemoryMesaRepository


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
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
def settings():
    """Mutable per-test settings served through get_settings."""
    return Settings(local_search_include_inactive=True)


@pytest.fixture
async def client(test_engine, test_session_factory, settings):
    """FastAPI test client with DB and settings dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings

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


@pytest.fixture
def fake_repo():
    return InMemoryMesaRepository()


@pytest.fixture
def service(fake_repo):
    return MesaLifecycleService(fake_repo, local_include_inactive=True)


@pytest.fixture
def mesa_payload():
    return {
        "capacidade": 4,
        "descricao": "Mesa perto da janela",
        "local": "Restaurante A",
    }
