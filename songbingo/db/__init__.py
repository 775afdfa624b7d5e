from songbingo.db.database import get_session, init_db
from songbingo.db.operations import (
    create_shared_card,
    get_all_songs,
    get_shared_cards_by_guest,
    get_song,
    song_to_model,
    upsert_song,
    upsert_songs,
)

__all__ = [
    "create_shared_card",
    "get_all_songs",
    "get_session",
    "get_shared_cards_by_guest",
    "get_song",
    "init_db",
    "song_to_model",
    "upsert_song",
    "upsert_songs",
]
