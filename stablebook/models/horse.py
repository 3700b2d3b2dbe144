"""
Horse schemas.

Horses are created and edited through multipart forms; the form text
fields are validated by HorseFormData before reaching the service.

Dependencies: pydantic
System role: Horse API contracts
"""

import datetime as dt

from pydantic import Field

from stablebook.boundary.db.models import Gender
from stablebook.models.common import CamelModel


class HorseResponse(CamelModel):
    """Response schema for horse operations."""

    id: int
    user_id: str
    name: str
    age: int
    breed: str
    gender: Gender
    image: str | None = None
    father_name: str | None = None
    mother_name: str | None = None
    cert_image: str | None = None
    firebase_id: str | None = None
    created_at: dt.datetime


class HorseFormData(CamelModel):
    """Validated text fields of the horse create/edit form."""

    name: str = Field(..., min_length=1, max_length=255)
    age: int = Field(..., ge=0, le=60)
    breed: str = Field("", max_length=255)
    gender: Gender
    father_name: str | None = Field(None, max_length=255)
    mother_name: str | None = Field(None, max_length=255)
