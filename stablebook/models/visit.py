"""
Visit schemas.

Dependencies: pydantic
System role: Veterinary visit API contracts
"""

import datetime as dt

from pydantic import Field

from stablebook.boundary.db.models import VisitType
from stablebook.models.common import CamelModel


class CreateVisitRequest(CamelModel):
    """Request schema for recording a veterinary visit."""

    horse_id: int = Field(..., description="Local id of the visited horse")
    date: dt.date
    vet_name: str = Field(..., min_length=1, max_length=255)
    type: VisitType = VisitType.ROUTINE
    notes: str | None = Field(None, max_length=4096)


class VisitResponse(CamelModel):
    """Response schema for visit operations."""

    id: int
    user_id: str
    horse_id: int
    date: dt.date
    vet_name: str
    type: VisitType
    notes: str | None = None
    firebase_id: str | None = None
    created_at: dt.datetime
