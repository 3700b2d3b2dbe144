"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database sessions, tenant contexts, image storage and
remote store fakes, record factories
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from stablebook.core.tenant import TenantContext


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from stablebook.boundary.db import models  # noqa: F401  registers tables
    from stablebook.boundary.db.base import Base

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def tenant() -> TenantContext:
    """Regular tenant."""
    return TenantContext(user_id="tenant-a", email="owner@example.com")


@pytest.fixture
def other_tenant() -> TenantContext:
    """Second tenant, used to check scoping."""
    return TenantContext(user_id="tenant-b", email="other@example.com")


@pytest.fixture
def admin() -> TenantContext:
    """Caller on the admin allow-list."""
    return TenantContext(user_id="admin-1", email="admin@example.com", is_admin=True)


@pytest.fixture
def image_storage(tmp_path):
    """Local image storage in a temporary directory."""
    from stablebook.boundary.storage import LocalImageStorage

    return LocalImageStorage(tmp_path / "uploads")


@pytest.fixture
def mock_document_store() -> MagicMock:
    """
    Create mock FirestoreDocumentStore.

    Returns:
        MagicMock: Store whose async methods succeed by default
    """
    store = MagicMock()
    store.fetch_all = AsyncMock(return_value=[])
    store.add = AsyncMock(return_value="remote-new")
    store.update = AsyncMock()
    store.delete = AsyncMock()
    return store


@pytest.fixture
def make_horse(test_async_db):
    """Factory inserting a horse for a tenant."""
    from stablebook.boundary.db.CRUD import horse_crud
    from stablebook.boundary.db.models import Gender

    async def _make(user_id: str = "tenant-a", **fields):
        values = {
            "name": "Shadow",
            "age": 7,
            "breed": "Arabian",
            "gender": Gender.FEMALE,
        }
        values.update(fields)
        horse = await horse_crud.create(test_async_db, user_id, **values)
        await test_async_db.commit()
        return horse

    return _make


@pytest.fixture
def make_records(test_async_db):
    """Factory inserting visits, vaccines and pregnancies for a horse."""
    from stablebook.boundary.db.CRUD import pregnancy_crud, vaccine_crud, visit_crud
    from stablebook.boundary.db.models import PregnancyStatus, VisitType

    async def _make(horse, visits: int = 0, vaccines: int = 0, pregnancies: int = 0, remote: bool = True):
        created = {"visits": [], "vaccines": [], "pregnancies": []}
        for i in range(visits):
            created["visits"].append(await visit_crud.create(
                test_async_db, horse.user_id,
                horse_id=horse.id, date=date(2024, 3, i + 1), vet_name="Dr. Levi",
                type=VisitType.ROUTINE, firebase_id=f"visit-{i}" if remote else None,
            ))
        for i in range(vaccines):
            created["vaccines"].append(await vaccine_crud.create(
                test_async_db, horse.user_id,
                horse_id=horse.id, type="Tetanus", date=date(2024, 2, i + 1),
                next_date=date(2025, 2, i + 1), firebase_id=f"vaccine-{i}" if remote else None,
            ))
        for i in range(pregnancies):
            created["pregnancies"].append(await pregnancy_crud.create(
                test_async_db, horse.user_id,
                horse_id=horse.id, mating_date=date(2024, 1, i + 1), stallion_name="Storm",
                status=PregnancyStatus.CONFIRMED, expected_date=date(2024, 12, i + 6),
                firebase_id=f"pregnancy-{i}" if remote else None,
            ))
        await test_async_db.commit()
        return created

    return _make
