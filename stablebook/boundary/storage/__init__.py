"""Image storage boundary."""

from stablebook.boundary.storage.image_storage import (
    DecodedImage,
    ImageStorage,
    LocalImageStorage,
    S3ImageStorage,
    decode_image_data_url,
    generate_image_name,
    is_data_url,
)

__all__ = [
    "DecodedImage",
    "ImageStorage",
    "LocalImageStorage",
    "S3ImageStorage",
    "decode_image_data_url",
    "generate_image_name",
    "is_data_url",
]
