from songbingo.api.cards import router as cards_router
from songbingo.api.health import router as health_router
from songbingo.api.sessions import router as sessions_router
from songbingo.api.songs import router as songs_router

__all__ = [
    "cards_router",
    "health_router",
    "sessions_router",
    "songs_router",
]
