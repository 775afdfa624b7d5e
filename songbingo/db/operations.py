"""
Database CRUD operations.

Provides async functions for reading the song catalog and recording
shared cards.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from songbingo.models.catalog import CatalogItem
from songbingo.models.db import SharedCardDB, SongDB

# --- Song Operations ---


async def get_all_songs(session: AsyncSession) -> list[SongDB]:
    """Get every song in the catalog, unordered."""
    result = await session.execute(select(SongDB))
    return list(result.scalars().all())


async def get_song(session: AsyncSession, song_id: str) -> SongDB | None:
    """Get a song by id. Returns None if it does not exist."""
    return await session.get(SongDB, song_id)


async def upsert_song(session: AsyncSession, item: CatalogItem) -> SongDB:
    """
    Insert or update a song.

    If a song with the same id exists, its titles are updated.
    """
    existing = await get_song(session, item.item_id)

    if existing:
        existing.title = item.display_title
        existing.short_title = item.short_label
        await session.flush()
        return existing

    song = SongDB(song_id=item.item_id, title=item.display_title, short_title=item.short_label)
    session.add(song)
    await session.flush()
    return song


async def upsert_songs(session: AsyncSession, items: list[CatalogItem]) -> int:
    """Upsert many songs. Returns the number of songs written."""
    for item in items:
        await upsert_song(session, item)
    return len(items)


def song_to_model(song: SongDB) -> CatalogItem:
    """Convert a database song to a catalog item."""
    return CatalogItem(
        item_id=song.song_id,
        display_title=song.title,
        short_label=song.short_title or None,
    )


# --- Shared Card Operations ---


async def create_shared_card(
    session: AsyncSession, guest_id: str, card_id: str, image_url: str
) -> SharedCardDB:
    """Record a shared card image for a guest."""
    card = SharedCardDB(guest_id=guest_id, card_id=card_id, image_url=image_url)
    session.add(card)
    await session.flush()
    return card


async def get_shared_cards_by_guest(
    session: AsyncSession, guest_id: str, limit: int = 50
) -> list[SharedCardDB]:
    """Get a guest's shared cards, newest first."""
    result = await session.execute(
        select(SharedCardDB)
        .where(SharedCardDB.guest_id == guest_id)
        .order_by(SharedCardDB.created_at.desc(), SharedCardDB.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())
