from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "SongBingo"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/songbingo"

    # Shared card images are written here and served under public_base_url
    card_images_dir: str = "./card-images"
    public_base_url: str = "http://localhost:8000"

    share_text: str = "ももクロちゃんのビンゴカードで遊んでるよ！"
    share_hashtags: list[str] = ["ももクロビンゴ", "ももいろクローバーZ"]

    cors_origins: list[str] = ["*"]

    max_sessions: int = 1000


settings = Settings()


# =============================================================================
# SHARE LIMITS
# =============================================================================

# Largest accepted decoded card image (bytes)
MAX_SHARE_IMAGE_BYTES = 5 * 1024 * 1024

# Prefix under which shared card images are stored
SHARED_CARD_KEY_PREFIX = "bingo-cards"
