"""Shared FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from songbingo.db.database import get_session
from songbingo.models.catalog import CatalogItem
from songbingo.services.catalog import catalog_cache
from songbingo.services.session_registry import SessionRegistry, session_registry
from songbingo.services.share import get_image_store
from songbingo.storage.images import LocalImageStore


async def get_catalog(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> tuple[CatalogItem, ...]:
    """The song catalog, loaded from the database on first use."""
    return await catalog_cache.load(session)


def get_registry() -> SessionRegistry:
    return session_registry


def get_store() -> LocalImageStore:
    return get_image_store()


Catalog = Annotated[tuple[CatalogItem, ...], Depends(get_catalog)]
Registry = Annotated[SessionRegistry, Depends(get_registry)]
ImageStore = Annotated[LocalImageStore, Depends(get_store)]
