from datetime import date
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from stablebook.api.deps.dependencies import get_horse_service, get_insight_service
from stablebook.boundary.storage import DecodedImage
from stablebook.core.exceptions import RecordNotFoundError
from stablebook.core.insights import TimelineEvent


@pytest.fixture
def mock_horse_service():
    return AsyncMock()


@pytest.fixture
def horses_client(client, mock_horse_service):
    client.app.dependency_overrides[get_horse_service] = lambda: mock_horse_service
    return client


@pytest.fixture
def cascade_result(horse_row):
    """Factory for a cascade delete result."""

    def _result(horse_remote_id="remote-horse"):
        related = {"visits": ["visit-0", "visit-1"], "vaccines": [], "pregnancies": ["pregnancy-0"]}
        return SimpleNamespace(horse=horse_row(firebase_id=horse_remote_id), remote_ids=lambda: related)

    return _result


def test_missing_tenant_header_is_unauthorized(horses_client, mock_horse_service):
    response = horses_client.get("/api/horses")

    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}
    mock_horse_service.list_horses.assert_not_called()


def test_list_horses_camel_case(horses_client, mock_horse_service, tenant_headers, horse_row):
    mock_horse_service.list_horses.return_value = [horse_row(mother_name="Luna", firebase_id="remote-1")]

    response = horses_client.get("/api/horses", headers=tenant_headers)

    assert response.status_code == 200
    data = response.json()
    assert data[0]["motherName"] == "Luna"
    assert data[0]["firebaseId"] == "remote-1"
    assert data[0]["userId"] == "tenant-a"
    tenant = mock_horse_service.list_horses.call_args.args[0]
    assert tenant.user_id == "tenant-a"
    assert not tenant.is_admin


def test_create_horse_multipart(horses_client, mock_horse_service, tenant_headers, horse_row):
    mock_horse_service.create_horse.return_value = horse_row(id=3, image="abc.png", father_name="Storm")

    response = horses_client.post(
        "/api/horses",
        headers=tenant_headers,
        data={"name": "Shadow", "age": "7", "breed": "Arabian", "gender": "female", "fatherName": "Storm"},
        files={"image": ("shadow.png", b"\x89PNG", "image/png")},
    )

    assert response.status_code == 201
    assert response.json()["image"] == "abc.png"
    _, form, photo, certificate = mock_horse_service.create_horse.call_args.args
    assert form.father_name == "Storm"
    assert photo == DecodedImage(content=b"\x89PNG", extension="png")
    assert certificate is None


def test_create_horse_rejects_non_image_upload(horses_client, mock_horse_service, tenant_headers):
    response = horses_client.post(
        "/api/horses",
        headers=tenant_headers,
        data={"name": "Shadow", "age": "7", "gender": "female"},
        files={"image": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Only image files are allowed"
    mock_horse_service.create_horse.assert_not_called()


def test_create_horse_invalid_gender(horses_client, tenant_headers):
    response = horses_client.post(
        "/api/horses",
        headers=tenant_headers,
        data={"name": "Shadow", "age": "7", "gender": "unknown"},
    )

    assert response.status_code == 422


def test_update_missing_horse_is_404(horses_client, mock_horse_service, tenant_headers):
    mock_horse_service.update_horse.side_effect = RecordNotFoundError("horse", 99)

    response = horses_client.put(
        "/api/horses/99",
        headers=tenant_headers,
        data={"name": "Shadow", "age": "7", "gender": "female"},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Horse not found"


def test_tenant_delete_returns_only_horse_remote_id(horses_client, mock_horse_service, tenant_headers, cascade_result):
    mock_horse_service.delete_horse.return_value = cascade_result()

    response = horses_client.delete("/api/horses/1", headers=tenant_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "firebaseId": "remote-horse"}


def test_tenant_delete_keeps_null_remote_id(horses_client, mock_horse_service, tenant_headers, cascade_result):
    mock_horse_service.delete_horse.return_value = cascade_result(horse_remote_id=None)

    response = horses_client.delete("/api/horses/1", headers=tenant_headers)

    assert response.json() == {"success": True, "firebaseId": None}


def test_admin_delete_lists_related_remote_ids(horses_client, mock_horse_service, admin_headers, cascade_result):
    mock_horse_service.delete_horse.return_value = cascade_result()

    response = horses_client.delete("/api/horses/1", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "firebaseId": "remote-horse",
        "relatedFirebaseIds": {
            "visits": ["visit-0", "visit-1"],
            "vaccines": [],
            "pregnancies": ["pregnancy-0"],
        },
    }
    assert mock_horse_service.delete_horse.call_args.args[0].is_admin


def test_set_remote_id(horses_client, mock_horse_service, tenant_headers):
    response = horses_client.patch(
        "/api/horses/1/firebase-id", headers=tenant_headers, json={"firebaseId": "remote-9"}
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert mock_horse_service.set_remote_id.call_args.args[1:] == (1, "remote-9")


def test_timeline(client, tenant_headers):
    insight_service = AsyncMock()
    insight_service.timeline.return_value = [
        TimelineEvent(type="visit", date=date(2024, 3, 1), label="Vet visit", record_id=10, details={"vetName": "Dr. Levi"}),
    ]
    client.app.dependency_overrides[get_insight_service] = lambda: insight_service

    response = client.get("/api/horses/1/timeline", headers=tenant_headers)

    assert response.status_code == 200
    assert response.json() == [
        {"type": "visit", "date": "2024-03-01", "label": "Vet visit", "recordId": 10, "details": {"vetName": "Dr. Levi"}}
    ]
