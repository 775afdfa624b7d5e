"""Tests for database CRUD operations."""

from songbingo.db.operations import (
    create_shared_card,
    get_all_songs,
    get_shared_cards_by_guest,
    get_song,
    song_to_model,
    upsert_song,
    upsert_songs,
)
from songbingo.models.catalog import CatalogItem


class TestSongOperations:
    async def test_upsert_creates_song(self, session) -> None:
        song = await upsert_song(
            session, CatalogItem(item_id="1", display_title="Z Densetsu", short_label="Z")
        )

        assert song.song_id == "1"
        assert song.short_title == "Z"

    async def test_upsert_updates_existing(self, session) -> None:
        await upsert_song(session, CatalogItem(item_id="1", display_title="Old"))
        await session.commit()

        await upsert_song(session, CatalogItem(item_id="1", display_title="New", short_label="N"))
        await session.commit()

        songs = await get_all_songs(session)
        assert len(songs) == 1
        assert songs[0].title == "New"
        assert songs[0].short_title == "N"

    async def test_upsert_many(self, session, catalog_items) -> None:
        count = await upsert_songs(session, catalog_items)
        assert count == 30
        assert len(await get_all_songs(session)) == 30

    async def test_get_missing_song(self, session) -> None:
        assert await get_song(session, "missing") is None

    async def test_song_to_model(self, session) -> None:
        song = await upsert_song(session, CatalogItem(item_id="7", display_title="Seven"))
        item = song_to_model(song)
        assert item == CatalogItem(item_id="7", display_title="Seven", short_label=None)


class TestSharedCardOperations:
    async def test_create_shared_card(self, session) -> None:
        card = await create_shared_card(
            session, guest_id="guest-1", card_id="card-1", image_url="https://x/1.png"
        )
        assert card.id is not None
        assert card.guest_id == "guest-1"

    async def test_cards_by_guest_newest_first(self, session) -> None:
        for i in range(3):
            await create_shared_card(
                session, guest_id="guest-1", card_id=f"card-{i}", image_url=f"https://x/{i}.png"
            )
        await create_shared_card(
            session, guest_id="guest-2", card_id="other", image_url="https://x/o.png"
        )
        await session.commit()

        cards = await get_shared_cards_by_guest(session, "guest-1")

        assert [c.card_id for c in cards] == ["card-2", "card-1", "card-0"]

    async def test_cards_by_guest_limit(self, session) -> None:
        for i in range(5):
            await create_shared_card(
                session, guest_id="g", card_id=f"c{i}", image_url=f"https://x/{i}.png"
            )
        await session.commit()

        assert len(await get_shared_cards_by_guest(session, "g", limit=2)) == 2
