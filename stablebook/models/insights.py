"""
Reminder, timeline and statistics schemas.

Dependencies: pydantic
System role: Read-only insight API contracts
"""

import datetime as dt
from typing import Any

from pydantic import Field

from stablebook.core.reminders import ReminderLevel
from stablebook.models.common import CamelModel


class ReminderResponse(CamelModel):
    """A derived due/overdue alert."""

    kind: str
    level: ReminderLevel
    priority: int
    due_date: dt.date
    days_until: int
    horse_id: int
    horse_name: str
    record_id: int
    title: str
    message: str


class TimelineEventResponse(CamelModel):
    """One event in a horse's history."""

    type: str
    date: dt.date
    label: str
    record_id: int
    details: dict[str, Any] = Field(default_factory=dict)


class StableStatsResponse(CamelModel):
    """Dashboard statistics for the caller's stable."""

    total_horses: int
    male_count: int
    female_count: int
    male_percent: int
    female_percent: int
    age_groups: dict[str, int]
    visit_count: int
    vaccine_count: int
    pregnancy_count: int


class AdminCheckResponse(CamelModel):
    """Whether the caller is on the admin allow-list."""

    is_admin: bool
