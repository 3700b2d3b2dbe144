"""
Pregnancy schemas.

The expected foaling date is derived server-side from the mating date.

Dependencies: pydantic
System role: Pregnancy API contracts
"""

import datetime as dt

from pydantic import Field

from stablebook.boundary.db.models import PregnancyStatus
from stablebook.models.common import CamelModel


class CreatePregnancyRequest(CamelModel):
    """Request schema for recording a pregnancy."""

    horse_id: int = Field(..., description="Local id of the mare")
    mating_date: dt.date
    stallion_name: str = Field(..., min_length=1, max_length=255)
    status: PregnancyStatus = PregnancyStatus.PENDING


class PregnancyResponse(CamelModel):
    """Response schema for pregnancy operations."""

    id: int
    user_id: str
    horse_id: int
    mating_date: dt.date
    stallion_name: str
    status: PregnancyStatus
    expected_date: dt.date
    firebase_id: str | None = None
    created_at: dt.datetime
