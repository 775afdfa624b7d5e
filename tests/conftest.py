import random

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from songbingo.api.deps import get_store
from songbingo.db.database import get_session
from songbingo.db.operations import upsert_songs
from songbingo.main import app
from songbingo.models import failure as failure_module
from songbingo.models.catalog import CatalogItem
from songbingo.models.db import Base
from songbingo.services.card_composer import compose_card
from songbingo.services.catalog import catalog_cache
from songbingo.services.session_registry import session_registry
from songbingo.storage.images import LocalImageStore


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    Python reuses memory addresses for new objects, so stale id()s from
    earlier tests could otherwise look finalized.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


@pytest.fixture(autouse=True)
def reset_process_state():
    """Each test starts with an unloaded catalog and no sessions."""
    catalog_cache.reset()
    session_registry.clear()
    yield
    catalog_cache.reset()
    session_registry.clear()


def make_items(count: int, prefix: str = "S") -> list[CatalogItem]:
    return [
        CatalogItem(item_id=f"{prefix}{i:03d}", display_title=f"Song {i}")
        for i in range(1, count + 1)
    ]


@pytest.fixture
def catalog_items() -> list[CatalogItem]:
    """Thirty distinct songs S001..S030."""
    return make_items(30)


@pytest.fixture
def arrangement(catalog_items):
    """A composed card with a fixed seed."""
    return compose_card(catalog_items, rng=random.Random(42))


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
async def seeded_db(async_engine, catalog_items):
    """Seed the catalog with the thirty test songs."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        await upsert_songs(session, catalog_items)
        await session.commit()
    return catalog_items


@pytest.fixture
def image_store(tmp_path) -> LocalImageStore:
    return LocalImageStore(root=tmp_path / "images", public_base_url="https://cdn.example.com")


@pytest.fixture
async def client(async_engine, image_store):
    """Provide an async test client with overridden database session and image store."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_store] = lambda: image_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
