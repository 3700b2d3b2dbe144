"""
Horse upload validation utilities.

Checks uploaded photos and certificates before they reach storage:
images only, bounded size.

Dependencies: fastapi, stablebook.boundary.storage
System role: Horse form upload validation
"""

from pathlib import PurePath

from fastapi import UploadFile

from stablebook.boundary.storage import DecodedImage
from stablebook.core.exceptions import ValidationError

IMAGE_CONTENT_PREFIX = "image/"


def _extension(upload: UploadFile) -> str:
    suffix = PurePath(upload.filename or "").suffix.lstrip(".").lower()
    if suffix:
        return suffix
    subtype = (upload.content_type or "").split("/", 1)[-1].lower()
    return "jpg" if subtype == "jpeg" else subtype


async def read_image_upload(
    upload: UploadFile | None,
    field: str,
    max_bytes: int,
) -> DecodedImage | None:
    """
    Validate and read an uploaded image.

    Args:
        upload: Uploaded file, None when the field was not sent
        field: Form field name, used in error messages
        max_bytes: Maximum accepted size

    Returns:
        DecodedImage with content and extension, None when nothing was uploaded

    Raises:
        ValidationError: If the upload is not an image or is too large
    """
    if upload is None or not upload.filename:
        return None
    if not (upload.content_type or "").startswith(IMAGE_CONTENT_PREFIX):
        raise ValidationError("Only image files are allowed", field=field)

    content = await upload.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise ValidationError(
            f"Image exceeds the {max_bytes // (1024 * 1024)} MB limit",
            field=field,
        )
    if not content:
        return None
    return DecodedImage(content=content, extension=_extension(upload))
