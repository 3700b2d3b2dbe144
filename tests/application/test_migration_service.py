"""
Test suite for the migration engine.

Runs against in-memory SQLite with local image storage in a temporary
directory and a mocked remote store.

System role: Verification of legacy import, re-keying and guards
"""

import base64
from datetime import date

import pytest

from stablebook.application.services.migration_service import MigrationService, parse_date
from stablebook.boundary.db.CRUD import horse_crud, pregnancy_crud, vaccine_crud, visit_crud
from stablebook.boundary.db.models import Gender, PregnancyStatus, VisitType
from stablebook.models.migration import MigrationRequest

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def data_url(ext: str = "png", content: bytes = PNG_BYTES) -> str:
    return f"data:image/{ext};base64,{base64.b64encode(content).decode()}"


@pytest.fixture
def snapshot() -> MigrationRequest:
    return MigrationRequest(
        horses=[
            {"id": "h1", "name": "Shadow", "age": 7, "breed": "Arabian", "gender": "נקבה", "image": data_url("jpeg")},
            {"id": "h2", "name": "Blaze", "age": "4", "breed": "Quarter", "gender": "male"},
        ],
        visits=[
            {"id": "v1", "horseId": "h1", "date": "2024-03-01", "vetName": "Dr. Levi", "type": "טיפול"},
            {"id": "v2", "horseId": "missing", "date": "2024-03-02", "vetName": "Dr. Levi", "type": "routine"},
        ],
        vaccines=[
            {"id": "x1", "horseId": "h2", "type": "Flu", "date": "2024-02-01", "nextDate": "2025-02-01"},
        ],
        pregnancies=[
            {"id": "p1", "horseId": "h1", "matingDate": "2024-01-01", "stallionName": "Storm", "status": "מאושר"},
        ],
    )


@pytest.fixture
def migration_service(test_async_db, image_storage, mock_document_store) -> MigrationService:
    return MigrationService(db=test_async_db, storage=image_storage, store=mock_document_store)


class TestImportSnapshot:
    """Supplied-snapshot import."""

    @pytest.mark.asyncio
    async def test_imports_and_rekeys_records(self, test_async_db, migration_service, snapshot) -> None:
        # Act
        counts = await migration_service.import_snapshot("tenant-a", snapshot)

        # Assert
        assert counts.model_dump() == {"horses": 2, "visits": 1, "vaccines": 1, "pregnancies": 1}
        horses = {h.firebase_id: h for h in await horse_crud.list_for_tenant(test_async_db, "tenant-a")}
        visits = await visit_crud.list_for_tenant(test_async_db, "tenant-a")
        vaccines = await vaccine_crud.list_for_tenant(test_async_db, "tenant-a")
        assert visits[0].horse_id == horses["h1"].id
        assert visits[0].type == VisitType.TREATMENT
        assert visits[0].firebase_id == "v1"
        assert vaccines[0].horse_id == horses["h2"].id
        assert vaccines[0].next_date == date(2025, 2, 1)

    @pytest.mark.asyncio
    async def test_orphan_visit_is_dropped(self, test_async_db, migration_service, snapshot) -> None:
        await migration_service.import_snapshot("tenant-a", snapshot)

        visits = await visit_crud.list_for_tenant(test_async_db, "tenant-a")

        assert [v.firebase_id for v in visits] == ["v1"]

    @pytest.mark.asyncio
    async def test_legacy_labels_normalized(self, test_async_db, migration_service, snapshot) -> None:
        await migration_service.import_snapshot("tenant-a", snapshot)

        horses = {h.firebase_id: h for h in await horse_crud.list_for_tenant(test_async_db, "tenant-a")}
        pregnancy = (await pregnancy_crud.list_for_tenant(test_async_db, "tenant-a"))[0]

        assert horses["h1"].gender == Gender.FEMALE
        assert horses["h2"].age == 4
        assert pregnancy.status == PregnancyStatus.CONFIRMED
        assert pregnancy.expected_date == date(2024, 12, 6)

    @pytest.mark.asyncio
    async def test_inline_image_decoded_to_file(self, test_async_db, migration_service, snapshot, image_storage) -> None:
        await migration_service.import_snapshot("tenant-a", snapshot)

        horses = {h.firebase_id: h for h in await horse_crud.list_for_tenant(test_async_db, "tenant-a")}
        reference = horses["h1"].image

        assert reference.endswith(".jpg")
        assert (image_storage.root / reference).read_bytes() == PNG_BYTES
        assert horses["h2"].image is None

    @pytest.mark.asyncio
    async def test_second_run_inserts_nothing(self, test_async_db, migration_service, snapshot) -> None:
        # Arrange
        await migration_service.import_snapshot("tenant-a", snapshot)

        # Act
        counts = await migration_service.import_snapshot("tenant-a", snapshot)

        # Assert
        assert counts.model_dump() == {"horses": 0, "visits": 0, "vaccines": 0, "pregnancies": 0}
        assert len(await horse_crud.list_for_tenant(test_async_db, "tenant-a")) == 2

    @pytest.mark.asyncio
    async def test_undecodable_image_left_empty(self, test_async_db, migration_service) -> None:
        snapshot = MigrationRequest(horses=[
            {"id": "h1", "name": "Shadow", "age": 3, "gender": "female", "image": "data:text/plain;base64,aGk="},
        ])

        await migration_service.import_snapshot("tenant-a", snapshot)

        horse = (await horse_crud.list_for_tenant(test_async_db, "tenant-a"))[0]
        assert horse.image is None

    @pytest.mark.asyncio
    async def test_non_text_label_falls_back_to_default(self, test_async_db, migration_service) -> None:
        snapshot = MigrationRequest(horses=[
            {"id": "h1", "name": "Shadow", "age": 7, "gender": "female"},
            {"id": "h2", "name": "Blaze", "age": 4, "gender": 1},
        ], visits=[
            {"id": "v1", "horseId": "h2", "date": "2024-03-01", "vetName": "Dr. Levi", "type": 3},
        ])

        counts = await migration_service.import_snapshot("tenant-a", snapshot)

        assert counts.horses == 2
        horses = {h.firebase_id: h for h in await horse_crud.list_for_tenant(test_async_db, "tenant-a")}
        assert horses["h1"].gender == Gender.FEMALE
        assert horses["h2"].gender == Gender.MALE
        assert (await visit_crud.list_for_tenant(test_async_db, "tenant-a"))[0].type == VisitType.ROUTINE

    @pytest.mark.asyncio
    async def test_failed_import_removes_stored_images(
        self, test_async_db, migration_service, image_storage, monkeypatch
    ) -> None:
        # Arrange
        snapshot = MigrationRequest(horses=[
            {"id": "h1", "name": "Shadow", "age": 7, "gender": "female", "image": data_url()},
        ], visits=[
            {"id": "v1", "horseId": "h1", "date": "2024-03-01", "vetName": "Dr. Levi"},
        ])

        async def failing_create(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(visit_crud, "create", failing_create)

        # Act
        with pytest.raises(RuntimeError):
            await migration_service.import_snapshot("tenant-a", snapshot)

        # Assert
        assert await horse_crud.count_for_tenant(test_async_db, "tenant-a") == 0
        assert list(image_storage.root.iterdir()) == []


class TestAutoMigrate:
    """Automatic migration from the remote store."""

    @pytest.mark.asyncio
    async def test_tenant_fetch_is_filtered(self, migration_service, mock_document_store, tenant) -> None:
        # Arrange
        documents = {
            "horses": [{"id": "h1", "name": "Shadow", "age": 7, "gender": "female", "userId": "tenant-a"}],
            "visits": [{"id": "v1", "horseId": "h1", "date": "2024-03-01", "vetName": "Dr. Levi", "userId": "tenant-a"}],
            "vaccines": [],
            "pregnancies": [],
        }
        mock_document_store.fetch_all.side_effect = lambda collection, user_id=None: documents[collection]

        # Act
        report = await migration_service.auto_migrate(tenant)

        # Assert
        assert report.success
        assert report.imported.horses == 1
        assert report.imported.visits == 1
        for call in mock_document_store.fetch_all.call_args_list:
            assert call.kwargs["user_id"] == "tenant-a"

    @pytest.mark.asyncio
    async def test_no_remote_horses_stops_after_one_read(self, migration_service, mock_document_store, tenant) -> None:
        report = await migration_service.auto_migrate(tenant)

        assert report.imported.horses == 0
        mock_document_store.fetch_all.assert_awaited_once_with("horses", user_id="tenant-a")

    @pytest.mark.asyncio
    async def test_admin_groups_migrate_independently(
        self, test_async_db, migration_service, mock_document_store, admin, make_horse
    ) -> None:
        # Arrange
        await make_horse("tenant-b", name="Already here")
        documents = {
            "horses": [
                {"id": "a1", "name": "Ayala", "age": 5, "gender": "female", "userId": "tenant-a"},
                {"id": "b1", "name": "Bolt", "age": 9, "gender": "male", "userId": "tenant-b"},
                {"id": "c1", "name": "Comet", "age": 2, "gender": "male", "userId": "tenant-c"},
                {"id": "n1", "name": "Nobody", "age": 2, "gender": "male"},
            ],
            "visits": [],
            "vaccines": [],
            "pregnancies": [],
        }
        mock_document_store.fetch_all.side_effect = lambda collection, user_id=None: documents[collection]

        # Act
        report = await migration_service.auto_migrate(admin)

        # Assert
        assert set(report.tenants) == {"tenant-a", "tenant-b", "tenant-c"}
        assert report.tenants["tenant-b"].horses == 0
        assert report.imported.horses == 2
        assert [h.name for h in await horse_crud.list_for_tenant(test_async_db, "tenant-c")] == ["Comet"]

    @pytest.mark.asyncio
    async def test_failing_group_does_not_block_others(
        self, test_async_db, migration_service, mock_document_store, admin, monkeypatch
    ) -> None:
        # Arrange
        documents = {
            "horses": [
                {"id": "a1", "name": "Ayala", "age": 5, "gender": "female", "userId": "tenant-a"},
                {"id": "b1", "name": "Bolt", "age": 9, "gender": "male", "userId": "tenant-b"},
            ],
            "visits": [],
            "vaccines": [],
            "pregnancies": [],
        }
        mock_document_store.fetch_all.side_effect = lambda collection, user_id=None: documents[collection]
        real_import = migration_service._import

        async def failing_import(user_id, *args):
            if user_id == "tenant-a":
                raise RuntimeError("disk full")
            return await real_import(user_id, *args)

        monkeypatch.setattr(migration_service, "_import", failing_import)

        # Act
        report = await migration_service.auto_migrate(admin)

        # Assert
        assert report.failed_tenants == ["tenant-a"]
        assert not report.success
        assert report.tenants["tenant-b"].horses == 1
        assert await horse_crud.count_for_tenant(test_async_db, "tenant-b") == 1
        assert await horse_crud.count_for_tenant(test_async_db, "tenant-a") == 0

    @pytest.mark.asyncio
    async def test_remote_fetch_failure_is_reported_not_raised(
        self, migration_service, mock_document_store, tenant
    ) -> None:
        mock_document_store.fetch_all.side_effect = RuntimeError("unavailable")

        report = await migration_service.auto_migrate(tenant)

        assert not report.success
        assert report.failed_tenants == ["tenant-a"]

    @pytest.mark.asyncio
    async def test_disabled_remote_store_skips(self, test_async_db, image_storage, tenant) -> None:
        service = MigrationService(db=test_async_db, storage=image_storage, store=None)

        report = await service.auto_migrate(tenant)

        assert report.skipped
        assert report.imported.horses == 0


class TestParseDate:
    """Legacy date parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-03-01", date(2024, 3, 1)),
            ("2024-03-01T10:00:00.000Z", date(2024, 3, 1)),
            ("", None),
            (None, None),
            ("not a date", None),
        ],
    )
    def test_values(self, value, expected) -> None:
        assert parse_date(value) == expected


class TestMigrationRequest:
    """Snapshot payload parsing."""

    def test_null_collections_become_empty(self) -> None:
        request = MigrationRequest(horses=[{"id": "h1"}], visits=None, vaccines=None)

        assert request.visits == []
        assert request.vaccines == []
        assert request.pregnancies == []
