"""
Reminder derivation for vaccines and foaling dates.

Pure functions: given vaccines, pregnancies, the horses that own them and a
reference day, produce ordered alerts. Nothing is persisted.

Vaccines (by next due date):
    days_until < 0        -> overdue
    days_until == 0       -> due today
    1 <= days_until <= 7  -> upcoming
Pregnancies not ended (by expected date):
    days_until < 0        -> overdue
    0 <= days_until <= 7  -> due soon
    8 <= days_until <= 30 -> upcoming

Alerts sort by priority tier, then by due date ascending.

Dependencies: None
System role: Due/overdue notification derivation
"""

import enum
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable

UNKNOWN_HORSE = "Unknown horse"

VACCINE_WINDOW_DAYS = 7
FOALING_SOON_DAYS = 7
FOALING_WINDOW_DAYS = 30


class ReminderLevel(str, enum.Enum):
    """Urgency of a reminder."""

    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    UPCOMING = "upcoming"


PRIORITY = {
    ReminderLevel.OVERDUE: 0,
    ReminderLevel.DUE_TODAY: 1,
    ReminderLevel.DUE_SOON: 1,
    ReminderLevel.UPCOMING: 2,
}


@dataclass(frozen=True)
class Reminder:
    """A single alert derived from a vaccine or pregnancy record."""

    kind: str
    level: ReminderLevel
    due_date: date
    days_until: int
    horse_id: int
    horse_name: str
    record_id: int
    title: str
    message: str

    @property
    def priority(self) -> int:
        return PRIORITY[self.level]


def _as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def _vaccine_level(days_until: int) -> ReminderLevel | None:
    if days_until < 0:
        return ReminderLevel.OVERDUE
    if days_until == 0:
        return ReminderLevel.DUE_TODAY
    if days_until <= VACCINE_WINDOW_DAYS:
        return ReminderLevel.UPCOMING
    return None


def _foaling_level(days_until: int) -> ReminderLevel | None:
    if days_until < 0:
        return ReminderLevel.OVERDUE
    if days_until <= FOALING_SOON_DAYS:
        return ReminderLevel.DUE_SOON
    if days_until <= FOALING_WINDOW_DAYS:
        return ReminderLevel.UPCOMING
    return None


def _vaccine_text(level: ReminderLevel, horse_name: str, vaccine_type: str, days_until: int, due: date) -> tuple[str, str]:
    if level is ReminderLevel.OVERDUE:
        return (
            "Vaccine overdue",
            f'{horse_name}: "{vaccine_type}" was due {abs(days_until)} days ago',
        )
    if level is ReminderLevel.DUE_TODAY:
        return "Vaccine due today", f'{horse_name}: "{vaccine_type}" is scheduled for today'
    return (
        "Vaccine coming up",
        f'{horse_name}: "{vaccine_type}" in {days_until} days ({due.isoformat()})',
    )


def _foaling_text(level: ReminderLevel, horse_name: str, days_until: int, due: date) -> tuple[str, str]:
    if level is ReminderLevel.OVERDUE:
        return (
            "Expected foaling date passed",
            f"{horse_name}: expected foaling was {abs(days_until)} days ago",
        )
    if level is ReminderLevel.DUE_SOON:
        return "Foaling very soon", f"{horse_name}: foaling expected in {days_until} days ({due.isoformat()})"
    return "Foaling approaching", f"{horse_name}: foaling expected in {days_until} days ({due.isoformat()})"


def derive_reminders(
    vaccines: Iterable[Any],
    pregnancies: Iterable[Any],
    horses: Iterable[Any],
    today: date | datetime,
) -> list[Reminder]:
    """
    Compute ordered reminders.

    Args:
        vaccines: Records with id, horse_id, type, next_date
        pregnancies: Records with id, horse_id, status, expected_date
        horses: Records with id and name, used for display names
        today: Reference day; a datetime is truncated to its date

    Returns:
        list[Reminder]: Alerts ordered by priority tier then due date
    """
    today = _as_date(today)
    names = {horse.id: horse.name for horse in horses}
    reminders: list[Reminder] = []

    for vaccine in vaccines:
        if not vaccine.next_date:
            continue
        due = _as_date(vaccine.next_date)
        days_until = (due - today).days
        level = _vaccine_level(days_until)
        if level is None:
            continue
        horse_name = names.get(vaccine.horse_id, UNKNOWN_HORSE)
        title, message = _vaccine_text(level, horse_name, vaccine.type, days_until, due)
        reminders.append(Reminder(
            kind="vaccine",
            level=level,
            due_date=due,
            days_until=days_until,
            horse_id=vaccine.horse_id,
            horse_name=horse_name,
            record_id=vaccine.id,
            title=title,
            message=message,
        ))

    for pregnancy in pregnancies:
        if pregnancy.status == "ended":
            continue
        due = _as_date(pregnancy.expected_date)
        days_until = (due - today).days
        level = _foaling_level(days_until)
        if level is None:
            continue
        horse_name = names.get(pregnancy.horse_id, UNKNOWN_HORSE)
        title, message = _foaling_text(level, horse_name, days_until, due)
        reminders.append(Reminder(
            kind="pregnancy",
            level=level,
            due_date=due,
            days_until=days_until,
            horse_id=pregnancy.horse_id,
            horse_name=horse_name,
            record_id=pregnancy.id,
            title=title,
            message=message,
        ))

    reminders.sort(key=lambda r: (r.priority, r.due_date))
    return reminders
