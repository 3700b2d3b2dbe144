from unittest.mock import AsyncMock

import pytest

from stablebook.api.deps.dependencies import get_migration_service
from stablebook.models.migration import ImportCounts, MigrationReport


@pytest.fixture
def mock_migration_service():
    return AsyncMock()


@pytest.fixture
def migration_client(client, mock_migration_service):
    client.app.dependency_overrides[get_migration_service] = lambda: mock_migration_service
    return client


def test_migrate_snapshot(migration_client, mock_migration_service, tenant_headers):
    mock_migration_service.import_snapshot.return_value = ImportCounts(horses=2, visits=1)
    payload = {
        "horses": [{"id": "h1", "name": "Shadow", "age": 7, "gender": "נקבה"}],
        "visits": [{"id": "v1", "horseId": "h1", "date": "2024-03-01", "vetName": "Dr. Levi"}],
    }

    response = migration_client.post("/api/migrate", headers=tenant_headers, json=payload)

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "imported": {"horses": 2, "visits": 1, "vaccines": 0, "pregnancies": 0},
    }
    user_id, snapshot = mock_migration_service.import_snapshot.call_args.args
    assert user_id == "tenant-a"
    assert snapshot.horses[0]["gender"] == "נקבה"
    assert snapshot.vaccines == []


def test_migrate_accepts_null_collections(migration_client, mock_migration_service, tenant_headers):
    mock_migration_service.import_snapshot.return_value = ImportCounts(horses=1)
    payload = {"horses": [{"id": "h1", "name": "Shadow"}], "visits": None, "pregnancies": None}

    response = migration_client.post("/api/migrate", headers=tenant_headers, json=payload)

    assert response.status_code == 200
    snapshot = mock_migration_service.import_snapshot.call_args.args[1]
    assert snapshot.visits == []
    assert snapshot.pregnancies == []


def test_migrate_failure_is_500(migration_client, mock_migration_service, tenant_headers):
    mock_migration_service.import_snapshot.side_effect = RuntimeError("database is locked")

    response = migration_client.post("/api/migrate", headers=tenant_headers, json={"horses": []})

    assert response.status_code == 500


def test_remote_migration_report(migration_client, mock_migration_service, admin_headers):
    mock_migration_service.auto_migrate.return_value = MigrationReport(
        success=False,
        imported=ImportCounts(horses=3),
        tenants={"tenant-b": ImportCounts(horses=3)},
        failed_tenants=["tenant-a"],
    )

    response = migration_client.post("/api/migrate/remote", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["failedTenants"] == ["tenant-a"]
    assert data["tenants"]["tenant-b"]["horses"] == 3
    assert mock_migration_service.auto_migrate.call_args.args[0].is_admin
