from songbingo.storage.images import (
    ImageStoreError,
    InvalidImageError,
    LocalImageStore,
    decode_image_data,
    new_card_key,
)

__all__ = [
    "ImageStoreError",
    "InvalidImageError",
    "LocalImageStore",
    "decode_image_data",
    "new_card_key",
]
