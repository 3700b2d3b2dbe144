"""
Herd insights: per-horse timeline and stable statistics.

Dependencies: None
System role: Read-only aggregations over stable records
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable

AGE_GROUPS = (("0-3", 3), ("4-10", 10), ("11+", None))


@dataclass(frozen=True)
class TimelineEvent:
    """One dated event in a horse's history."""

    type: str
    date: date
    label: str
    record_id: int
    details: dict[str, Any] = field(default_factory=dict)


def build_timeline(
    visits: Iterable[Any],
    vaccines: Iterable[Any],
    pregnancies: Iterable[Any],
) -> list[TimelineEvent]:
    """
    Merge a horse's records into events, newest first.

    Each pregnancy contributes two events: the mating and the expected
    foaling.
    """
    events: list[TimelineEvent] = []
    for visit in visits:
        events.append(TimelineEvent(
            type="visit",
            date=visit.date,
            label="Vet visit",
            record_id=visit.id,
            details={"vetName": visit.vet_name, "visitType": visit.type.value, "notes": visit.notes},
        ))
    for vaccine in vaccines:
        events.append(TimelineEvent(
            type="vaccine",
            date=vaccine.date,
            label="Vaccination",
            record_id=vaccine.id,
            details={"vaccineType": vaccine.type, "nextDate": vaccine.next_date, "notes": vaccine.notes},
        ))
    for pregnancy in pregnancies:
        details = {"stallionName": pregnancy.stallion_name, "status": pregnancy.status.value}
        events.append(TimelineEvent(
            type="pregnancy_start",
            date=pregnancy.mating_date,
            label="Mating",
            record_id=pregnancy.id,
            details=details,
        ))
        events.append(TimelineEvent(
            type="pregnancy_due",
            date=pregnancy.expected_date,
            label="Expected foaling",
            record_id=pregnancy.id,
            details=details,
        ))
    events.sort(key=lambda e: e.date, reverse=True)
    return events


def _percent(count: int, total: int) -> int:
    return round(count * 100 / total) if total else 0


def age_group(age: int) -> str:
    """Dashboard age bucket for an age in years."""
    for label, upper in AGE_GROUPS:
        if upper is None or age <= upper:
            return label
    raise ValueError(f"Unsupported age: {age}")


def compute_stable_stats(
    horses: Iterable[Any],
    visit_count: int,
    vaccine_count: int,
    pregnancy_count: int,
) -> dict[str, Any]:
    """
    Gender split, age groups and record totals for the dashboard.

    Args:
        horses: Records with gender and age
        visit_count: Number of visits
        vaccine_count: Number of vaccines
        pregnancy_count: Number of pregnancies

    Returns:
        dict: Statistics keyed for the API response
    """
    horses = list(horses)
    total = len(horses)
    males = sum(1 for h in horses if h.gender == "male")
    females = sum(1 for h in horses if h.gender == "female")

    groups = {label: 0 for label, _ in AGE_GROUPS}
    for horse in horses:
        groups[age_group(horse.age)] += 1

    return {
        "total_horses": total,
        "male_count": males,
        "female_count": females,
        "male_percent": _percent(males, total),
        "female_percent": _percent(females, total),
        "age_groups": groups,
        "visit_count": visit_count,
        "vaccine_count": vaccine_count,
        "pregnancy_count": pregnancy_count,
    }
