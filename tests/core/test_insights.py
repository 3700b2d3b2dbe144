"""
Test suite for herd insights.

System role: Verification of timeline merging and dashboard statistics
"""

from datetime import date
from types import SimpleNamespace

from stablebook.boundary.db.models import Gender, PregnancyStatus, VisitType
from stablebook.core.insights import age_group, build_timeline, compute_stable_stats


class TestTimeline:
    """Timeline merging."""

    def test_events_merged_newest_first(self) -> None:
        # Arrange
        visits = [SimpleNamespace(id=1, date=date(2024, 3, 1), vet_name="Dr. Levi", type=VisitType.ROUTINE, notes=None)]
        vaccines = [SimpleNamespace(id=2, date=date(2024, 4, 1), type="Flu", next_date=None, notes=None)]
        pregnancies = [SimpleNamespace(
            id=3,
            mating_date=date(2024, 1, 1),
            expected_date=date(2024, 12, 6),
            stallion_name="Storm",
            status=PregnancyStatus.CONFIRMED,
        )]

        # Act
        events = build_timeline(visits, vaccines, pregnancies)

        # Assert
        assert [e.type for e in events] == ["pregnancy_due", "vaccine", "visit", "pregnancy_start"]
        assert events[0].details["status"] == "confirmed"
        assert events[2].details["visitType"] == "routine"

    def test_empty_history(self) -> None:
        assert build_timeline([], [], []) == []


class TestStats:
    """Dashboard statistics."""

    def test_gender_split_and_age_groups(self) -> None:
        horses = [
            SimpleNamespace(gender=Gender.MALE, age=2),
            SimpleNamespace(gender=Gender.FEMALE, age=5),
            SimpleNamespace(gender=Gender.FEMALE, age=12),
        ]

        stats = compute_stable_stats(horses, visit_count=4, vaccine_count=2, pregnancy_count=1)

        assert stats["total_horses"] == 3
        assert stats["male_count"] == 1
        assert stats["female_percent"] == 67
        assert stats["male_percent"] == 33
        assert stats["age_groups"] == {"0-3": 1, "4-10": 1, "11+": 1}
        assert stats["visit_count"] == 4

    def test_empty_stable_has_zero_percentages(self) -> None:
        stats = compute_stable_stats([], 0, 0, 0)

        assert stats["male_percent"] == 0
        assert stats["female_percent"] == 0

    def test_age_group_boundaries(self) -> None:
        assert age_group(3) == "0-3"
        assert age_group(4) == "4-10"
        assert age_group(10) == "4-10"
        assert age_group(11) == "11+"
