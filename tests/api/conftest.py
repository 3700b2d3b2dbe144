"""
Fixtures for HTTP API tests.

Services are replaced through ``app.dependency_overrides``; the tenant is
resolved from real headers.
"""

from datetime import datetime
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from stablebook.api.main import create_app
from stablebook.configs import get_settings


@pytest.fixture
def client():
    app = create_app()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def tenant_headers() -> dict[str, str]:
    return {"X-User-Id": "tenant-a", "X-User-Email": "owner@example.com"}


@pytest.fixture
def admin_headers(monkeypatch) -> dict[str, str]:
    """Headers of a caller on the admin allow-list."""
    monkeypatch.setenv("AUTH_ADMIN_EMAILS", "admin@example.com, boss@example.com")
    get_settings.cache_clear()
    yield {"X-User-Id": "admin-1", "X-User-Email": "Admin@Example.com"}
    get_settings.cache_clear()


@pytest.fixture
def horse_row():
    """Factory for objects shaped like a stored horse."""

    def _row(**fields) -> SimpleNamespace:
        values = {
            "id": 1,
            "user_id": "tenant-a",
            "name": "Shadow",
            "age": 7,
            "breed": "Arabian",
            "gender": "female",
            "image": None,
            "father_name": None,
            "mother_name": None,
            "cert_image": None,
            "firebase_id": None,
            "created_at": datetime(2024, 1, 1, 12, 0),
        }
        values.update(fields)
        return SimpleNamespace(**values)

    return _row


@pytest.fixture
def record_row():
    """Factory for objects shaped like a stored visit, vaccine or pregnancy."""

    def _row(**fields) -> SimpleNamespace:
        values = {
            "id": 10,
            "user_id": "tenant-a",
            "horse_id": 1,
            "firebase_id": None,
            "created_at": datetime(2024, 1, 1, 12, 0),
        }
        values.update(fields)
        return SimpleNamespace(**values)

    return _row
