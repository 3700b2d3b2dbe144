"""
Vaccine schemas.

Dependencies: pydantic
System role: Vaccination API contracts
"""

import datetime as dt

from pydantic import Field, model_validator

from stablebook.models.common import CamelModel


class CreateVaccineRequest(CamelModel):
    """Request schema for recording a vaccination."""

    horse_id: int = Field(..., description="Local id of the vaccinated horse")
    type: str = Field(..., min_length=1, max_length=255, description="Vaccine name")
    date: dt.date
    next_date: dt.date | None = Field(None, description="Next due date")
    notes: str | None = Field(None, max_length=4096)

    @model_validator(mode="after")
    def check_next_date(self) -> "CreateVaccineRequest":
        if self.next_date is not None and self.next_date < self.date:
            raise ValueError("nextDate must not be before date")
        return self


class VaccineResponse(CamelModel):
    """Response schema for vaccine operations."""

    id: int
    user_id: str
    horse_id: int
    type: str
    date: dt.date
    next_date: dt.date | None = None
    notes: str | None = None
    firebase_id: str | None = None
    created_at: dt.datetime
