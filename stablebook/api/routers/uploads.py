"""
Uploaded image endpoints for the s3 storage backend.

Routes: GET /uploads/{name} - Redirect to a presigned download URL

The local backend serves the uploads directory as static files instead.

Dependencies: stablebook.boundary.storage
System role: Image delivery for bucket-backed storage
"""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import RedirectResponse

from stablebook.api.deps.dependencies import get_service_cache
from stablebook.boundary.storage import S3ImageStorage

router = APIRouter(tags=["uploads"])


@router.get("/{name}")
async def get_uploaded_image(name: str) -> RedirectResponse:
    """Redirect to a short-lived presigned URL for a stored image."""
    storage = get_service_cache().image_storage
    if not isinstance(storage, S3ImageStorage) or "/" in name:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    url, _ = storage.generate_presigned_download_url(name)
    return RedirectResponse(url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
