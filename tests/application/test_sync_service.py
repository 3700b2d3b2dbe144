"""
Test suite for the dual-write synchronizer.

Remote store is mocked; local rows live in in-memory SQLite.

System role: Verification of best-effort remote mirroring
"""

from datetime import date
from types import SimpleNamespace

import pytest

from stablebook.application.services.sync_service import RemoteSync, build_document
from stablebook.boundary.db.CRUD import horse_crud
from stablebook.core.exceptions import RemoteStoreError


@pytest.fixture
def sync(test_async_db, mock_document_store) -> RemoteSync:
    return RemoteSync(db=test_async_db, store=mock_document_store)


class TestMirrorCreate:
    """Remote create followed by local remote-id update."""

    @pytest.mark.asyncio
    async def test_sets_remote_id_on_success(self, test_async_db, sync, mock_document_store, make_horse) -> None:
        # Arrange
        horse = await make_horse()
        mock_document_store.add.return_value = "remote-horse"

        # Act
        remote_id = await sync.mirror_create("horses", horse)

        # Assert
        assert remote_id == "remote-horse"
        stored = await horse_crud.get_any(test_async_db, horse.id)
        assert stored.firebase_id == "remote-horse"
        collection, document = mock_document_store.add.call_args.args
        assert collection == "horses"
        assert document["userId"] == "tenant-a"
        assert document["gender"] == "female"

    @pytest.mark.asyncio
    async def test_failure_is_swallowed(self, test_async_db, sync, mock_document_store, make_horse) -> None:
        horse = await make_horse()
        mock_document_store.add.side_effect = RemoteStoreError("quota exceeded", collection="horses")

        remote_id = await sync.mirror_create("horses", horse)

        assert remote_id is None
        assert (await horse_crud.get_any(test_async_db, horse.id)).firebase_id is None

    @pytest.mark.asyncio
    async def test_dependent_references_parent_remote_id(self, sync, mock_document_store, make_horse, make_records) -> None:
        horse = await make_horse(firebase_id="remote-horse")
        visit = (await make_records(horse, visits=1, remote=False))["visits"][0]

        await sync.mirror_create("visits", visit, horse_remote_id=horse.firebase_id)

        _, document = mock_document_store.add.call_args.args
        assert document["horseId"] == "remote-horse"
        assert document["date"] == "2024-03-01"
        assert document["vetName"] == "Dr. Levi"

    @pytest.mark.asyncio
    async def test_disabled_store_is_noop(self, test_async_db, make_horse) -> None:
        horse = await make_horse()

        assert await RemoteSync(db=test_async_db, store=None).mirror_create("horses", horse) is None


class TestMirrorUpdateAndDelete:
    """Horse update and single deletes."""

    @pytest.mark.asyncio
    async def test_update_skipped_without_remote_id(self, sync, mock_document_store, make_horse) -> None:
        horse = await make_horse()

        assert await sync.mirror_horse_update(horse) is False
        mock_document_store.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_sends_core_fields(self, sync, mock_document_store, make_horse) -> None:
        horse = await make_horse(firebase_id="remote-horse", age=9)

        assert await sync.mirror_horse_update(horse) is True
        mock_document_store.update.assert_awaited_once_with(
            "horses", "remote-horse", {"name": "Shadow", "age": 9, "breed": "Arabian", "gender": "female"}
        )

    @pytest.mark.asyncio
    async def test_delete_failure_is_swallowed(self, sync, mock_document_store) -> None:
        mock_document_store.delete.side_effect = RuntimeError("network down")

        assert await sync.mirror_delete("visits", "visit-0") is False

    @pytest.mark.asyncio
    async def test_delete_without_remote_id_is_skipped(self, sync, mock_document_store) -> None:
        assert await sync.mirror_delete("visits", None) is False
        mock_document_store.delete.assert_not_called()


class TestMirrorCascade:
    """Remote cleanup after a horse cascade."""

    @pytest.mark.asyncio
    async def test_each_remote_delete_caught_independently(
        self, test_async_db, sync, mock_document_store, make_horse, make_records
    ) -> None:
        # Arrange
        horse = await make_horse(firebase_id="remote-horse")
        await make_records(horse, visits=2, vaccines=1, pregnancies=1)
        result = await horse_crud.delete_cascade(test_async_db, horse.id, "tenant-a")
        await test_async_db.commit()

        async def flaky_delete(collection, document_id):
            if document_id == "visit-0":
                raise RemoteStoreError("not found", collection=collection, operation="delete")

        mock_document_store.delete.side_effect = flaky_delete

        # Act
        deleted = await sync.mirror_cascade(result)

        # Assert
        attempted = {call.args[1] for call in mock_document_store.delete.call_args_list}
        assert attempted == {"remote-horse", "visit-0", "visit-1", "vaccine-0", "pregnancy-0"}
        assert deleted == 4


class TestBuildDocument:
    """Remote document shapes."""

    def test_vaccine_document_falls_back_to_local_horse_id(self) -> None:
        vaccine = SimpleNamespace(
            user_id="tenant-a", horse_id=5, type="Flu",
            date=date(2024, 1, 1), next_date=None, notes="left neck",
        )

        document = build_document("vaccines", vaccine)

        assert document == {
            "userId": "tenant-a",
            "horseId": "5",
            "type": "Flu",
            "date": "2024-01-01",
            "nextDate": None,
            "notes": "left neck",
        }

    def test_unknown_collection_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_document("stables", SimpleNamespace(user_id="t", horse_id=1))
