from datetime import date
from unittest.mock import AsyncMock

import pytest

from stablebook.api.deps.dependencies import get_insight_service
from stablebook.core.reminders import Reminder, ReminderLevel


@pytest.fixture
def mock_insight_service():
    return AsyncMock()


@pytest.fixture
def insights_client(client, mock_insight_service):
    client.app.dependency_overrides[get_insight_service] = lambda: mock_insight_service
    return client


def test_reminders_with_reference_day(insights_client, mock_insight_service, tenant_headers):
    mock_insight_service.reminders.return_value = [
        Reminder(
            kind="vaccine",
            level=ReminderLevel.OVERDUE,
            due_date=date(2025, 1, 28),
            days_until=-2,
            horse_id=1,
            horse_name="Shadow",
            record_id=10,
            title="Vaccine overdue",
            message='Shadow: "Tetanus" was due 2 days ago',
        ),
    ]

    response = insights_client.get("/api/reminders?today=2025-01-30", headers=tenant_headers)

    assert response.status_code == 200
    reminder = response.json()[0]
    assert reminder["level"] == "overdue"
    assert reminder["priority"] == 0
    assert reminder["daysUntil"] == -2
    assert mock_insight_service.reminders.call_args.args[1] == date(2025, 1, 30)


def test_stats(insights_client, mock_insight_service, tenant_headers):
    mock_insight_service.stats.return_value = {
        "total_horses": 2,
        "male_count": 1,
        "female_count": 1,
        "male_percent": 50,
        "female_percent": 50,
        "age_groups": {"0-3": 1, "4-10": 1, "11+": 0},
        "visit_count": 4,
        "vaccine_count": 2,
        "pregnancy_count": 1,
    }

    response = insights_client.get("/api/stats", headers=tenant_headers)

    assert response.status_code == 200
    assert response.json()["totalHorses"] == 2
    assert response.json()["ageGroups"] == {"0-3": 1, "4-10": 1, "11+": 0}
