"""
Image storage for horse photos and pedigree certificates.

Stores image bytes under freshly generated names and removes replaced
images. The stored name is the reference kept on the horse row and is
served under the configured /uploads prefix.

Dependencies: boto3 (s3 backend), stdlib pathlib (local backend)
System role: File storage collaborator for uploads and migrated images
"""

import base64
import binascii
import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Protocol

import boto3
from botocore.exceptions import ClientError

from stablebook.core.exceptions import ImageStorageError

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r"^data:image/(\w+);base64,(.+)$", re.DOTALL)


@dataclass
class DecodedImage:
    """Image bytes decoded from an inline data URL."""

    content: bytes
    extension: str


def generate_image_name(extension: str) -> str:
    """
    Build a fresh storage name.

    Args:
        extension: File extension with or without the leading dot

    Returns:
        str: ``<uuid4>.<ext>`` (or bare uuid when no extension)
    """
    extension = extension.lstrip(".").lower()
    name = str(uuid.uuid4())
    return f"{name}.{extension}" if extension else name


def is_data_url(value: str | None) -> bool:
    """Whether a legacy image field holds an inline payload rather than a reference."""
    return bool(value) and value.startswith("data:")


def decode_image_data_url(value: str) -> DecodedImage | None:
    """
    Decode a ``data:image/<ext>;base64,<payload>`` string.

    ``jpeg`` is stored with the ``jpg`` extension.

    Args:
        value: Inline image payload from the legacy store

    Returns:
        DecodedImage, or None if the payload is not a base64 image
    """
    match = DATA_URL_PATTERN.match(value)
    if not match:
        return None
    extension = "jpg" if match.group(1) == "jpeg" else match.group(1)
    try:
        content = base64.b64decode(match.group(2), validate=False)
    except (binascii.Error, ValueError):
        return None
    return DecodedImage(content=content, extension=extension)


class ImageStorage(Protocol):
    """Storage contract used by the horse and migration services."""

    def save(self, content: bytes, extension: str) -> str:
        """Store bytes and return the new reference."""
        ...

    def delete(self, reference: str) -> None:
        """Remove a stored image; missing references are ignored."""
        ...


class LocalImageStorage:
    """Images stored as files in a directory served statically."""

    def __init__(self, uploads_dir: str | Path) -> None:
        """
        Initialize local storage, creating the directory if needed.

        Args:
            uploads_dir: Target directory
        """
        self.root = Path(uploads_dir)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, reference: str) -> Path:
        path = (self.root / reference).resolve()
        if path.parent != self.root.resolve():
            raise ImageStorageError("Invalid image reference", reference=reference)
        return path

    def save(self, content: bytes, extension: str) -> str:
        """
        Write image bytes under a fresh name.

        Args:
            content: Raw image bytes
            extension: File extension

        Returns:
            str: Stored file name

        Raises:
            ImageStorageError: If the file cannot be written
        """
        reference = generate_image_name(extension)
        try:
            self._path(reference).write_bytes(content)
        except OSError as e:
            raise ImageStorageError(f"Failed to store image: {e}", reference=reference) from e
        logger.debug("Stored image", extra={"reference": reference, "size": len(content)})
        return reference

    def delete(self, reference: str) -> None:
        """
        Remove a stored file if it exists.

        Args:
            reference: Stored file name
        """
        path = self._path(reference)
        if path.exists():
            path.unlink()
            logger.debug("Deleted image", extra={"reference": reference})

    def exists(self, reference: str) -> bool:
        """Whether a stored file exists."""
        return self._path(reference).exists()


class S3ImageStorage:
    """Images stored as objects in an S3 bucket."""

    def __init__(self, bucket: str, region: str, prefix: str = "uploads/") -> None:
        """
        Initialize S3 client for the image bucket.

        Args:
            bucket: S3 bucket name
            region: AWS region for S3 bucket
            prefix: Key prefix for stored images
        """
        self._bucket = bucket
        self._prefix = prefix
        self._s3_client = boto3.client("s3", region_name=region)

    def _key(self, reference: str) -> str:
        return f"{self._prefix}{reference}"

    def save(self, content: bytes, extension: str) -> str:
        """
        Upload image bytes under a fresh name.

        Raises:
            ImageStorageError: If the upload fails
        """
        reference = generate_image_name(extension)
        content_type = "image/jpeg" if extension in ("jpg", "jpeg") else f"image/{extension}"
        try:
            self._s3_client.put_object(
                Bucket=self._bucket,
                Key=self._key(reference),
                Body=content,
                ContentType=content_type,
            )
        except ClientError as e:
            raise ImageStorageError(f"Failed to upload image: {e}", reference=reference) from e
        return reference

    def delete(self, reference: str) -> None:
        """Delete an image object; S3 treats missing keys as success."""
        try:
            self._s3_client.delete_object(Bucket=self._bucket, Key=self._key(reference))
        except ClientError as e:
            raise ImageStorageError(f"Failed to delete image: {e}", reference=reference) from e

    def generate_presigned_download_url(
        self,
        reference: str,
        expires_in: int = 3600,
    ) -> tuple[str, datetime]:
        """
        Generate presigned URL for viewing a stored image.

        Args:
            reference: Stored image name
            expires_in: URL expiry in seconds (default 1 hour)

        Returns:
            tuple[str, datetime]: (presigned_url, expires_at)
        """
        presigned_url = self._s3_client.generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": self._bucket, "Key": self._key(reference)},
            ExpiresIn=expires_in,
        )
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return presigned_url, expires_at
