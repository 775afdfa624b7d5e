"""
Card sharing.

Stores an exported card image, records it for the guest, and builds the
X (Twitter) intent link that shares it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlencode

from sqlalchemy.ext.asyncio import AsyncSession

from songbingo.config import settings
from songbingo.db.operations import create_shared_card
from songbingo.storage.images import LocalImageStore, decode_image_data, new_card_key

logger = logging.getLogger(__name__)

TWEET_INTENT_URL = "https://twitter.com/intent/tweet"


@dataclass(frozen=True)
class SharedCard:
    card_id: str
    guest_id: str
    image_url: str


def get_image_store() -> LocalImageStore:
    """Image store configured from settings."""
    return LocalImageStore(
        root=Path(settings.card_images_dir),
        public_base_url=settings.public_base_url,
    )


async def share_card_image(
    session: AsyncSession,
    store: LocalImageStore,
    guest_id: str,
    image_data: str,
) -> SharedCard:
    """
    Store a card image and record it for `guest_id`.

    Raises:
        InvalidImageError: If the image data cannot be decoded
        ImageStoreError: If the image cannot be written
    """
    image_bytes = decode_image_data(image_data)
    card_id, key = new_card_key()
    image_url = store.put(key, image_bytes)

    await create_shared_card(session, guest_id=guest_id, card_id=card_id, image_url=image_url)
    logger.info("Guest %s shared card %s", guest_id, card_id)

    return SharedCard(card_id=card_id, guest_id=guest_id, image_url=image_url)


def build_share_intent_url(
    image_url: str | None = None,
    text: str | None = None,
    hashtags: list[str] | None = None,
) -> str:
    """X intent URL with the static share text, hashtags and optional image link."""
    params = {
        "text": text if text is not None else settings.share_text,
        "hashtags": ",".join(hashtags if hashtags is not None else settings.share_hashtags),
    }
    if image_url:
        params["url"] = image_url
    return f"{TWEET_INTENT_URL}?{urlencode(params)}"
