"""
Session-scoped song catalog.

The catalog is read from the database once and then served from memory.
Until a load finds songs the catalog is empty; callers see an empty
tuple rather than waiting on ambient fetch timing.
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from songbingo.db.operations import get_all_songs, song_to_model
from songbingo.models.catalog import CatalogItem, catalog_sort_key

logger = logging.getLogger(__name__)


class CatalogCache:
    """One-shot cache of the full song catalog."""

    def __init__(self) -> None:
        self._items: tuple[CatalogItem, ...] = ()
        self._loaded = False
        self._lock = asyncio.Lock()

    @property
    def items(self) -> tuple[CatalogItem, ...]:
        """Loaded catalog, or an empty tuple before the first load."""
        return self._items

    @property
    def loaded(self) -> bool:
        return self._loaded

    def find(self, item_id: str) -> CatalogItem | None:
        for item in self._items:
            if item.item_id == item_id:
                return item
        return None

    async def load(self, session: AsyncSession) -> tuple[CatalogItem, ...]:
        """
        Load the catalog if it has not been loaded yet.

        Concurrent callers wait for the same load. A failed or empty read
        leaves the cache unloaded so the next call reads again.
        """
        if self._loaded:
            return self._items

        async with self._lock:
            if not self._loaded:
                songs = await get_all_songs(session)
                items = sorted((song_to_model(s) for s in songs), key=catalog_sort_key)
                if not items:
                    logger.warning("Song catalog is empty; will read again on next request")
                    return ()
                self._items = tuple(items)
                self._loaded = True
                logger.info("Loaded song catalog with %d songs", len(self._items))

        return self._items

    def reset(self) -> None:
        """Forget the loaded catalog (used after seeding and in tests)."""
        self._items = ()
        self._loaded = False


catalog_cache = CatalogCache()
