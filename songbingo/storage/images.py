"""
Card image storage.

Shared card images are written under a local root directory and served
from `{public_base_url}/images/<key>`. Keys look like
`bingo-cards/<card id>.png`.
"""

import base64
import binascii
import logging
import re
import uuid
from dataclasses import dataclass
from pathlib import Path

from songbingo.config import MAX_SHARE_IMAGE_BYTES, SHARED_CARD_KEY_PREFIX
from songbingo.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class InvalidImageError(KnownError):
    """Raised when shared image data cannot be decoded."""

    def __init__(self, reason: str):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message="The card image could not be read.",
            detail=reason,
            suggestion="Export the card again and retry sharing.",
            status_code=400,
        )


class ImageStoreError(KnownError):
    """Raised when an image cannot be written to the store."""

    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(
            kind=FailureKind.STORAGE_ERROR,
            message="The card image could not be saved.",
            detail=f"{key}: {reason}",
            suggestion="Please try again later.",
            status_code=503,
        )


def decode_image_data(image_data: str) -> bytes:
    """
    Decode base64 image data, with or without a `data:image/...` prefix.

    Raises:
        InvalidImageError: If the data is empty, not base64, or too large
    """
    payload = DATA_URL_PREFIX.sub("", image_data.strip())
    if not payload:
        raise InvalidImageError("image data is empty")

    # Every 4 base64 characters carry 3 bytes; refuse oversize data before decoding
    estimated = len(payload) * 3 // 4
    if estimated > MAX_SHARE_IMAGE_BYTES + 2:
        raise InvalidImageError(f"image is about {estimated} bytes, limit {MAX_SHARE_IMAGE_BYTES}")

    try:
        decoded = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError("image data is not valid base64") from e

    if not decoded:
        raise InvalidImageError("image data is empty")
    if len(decoded) > MAX_SHARE_IMAGE_BYTES:
        raise InvalidImageError(f"image is {len(decoded)} bytes, limit {MAX_SHARE_IMAGE_BYTES}")
    if not decoded.startswith(PNG_SIGNATURE):
        logger.warning("Shared card image is not a PNG (%d bytes)", len(decoded))

    return decoded


def new_card_key() -> tuple[str, str]:
    """Fresh (card_id, storage key) pair."""
    card_id = str(uuid.uuid4())
    return card_id, f"{SHARED_CARD_KEY_PREFIX}/{card_id}.png"


@dataclass
class LocalImageStore:
    """Writes images to a directory and builds their public URLs."""

    root: Path
    public_base_url: str

    def url_for(self, key: str) -> str:
        return f"{self.public_base_url.rstrip('/')}/images/{key}"

    def put(self, key: str, data: bytes) -> str:
        """
        Store `data` under `key` and return its public URL.

        Raises:
            ImageStoreError: If the file cannot be written
        """
        path = self.root / key
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.error("Failed to write card image %s: %s", path, e)
            raise ImageStoreError(key, str(e)) from e

        logger.info("Stored card image %s (%d bytes)", key, len(data))
        return self.url_for(key)
