"""
Tests for the Firestore document store wrapper.

The Firestore client is a MagicMock; queries stream from an async generator.

System role: Verification of remote store reads and writes
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.api_core.exceptions import NotFound, ServiceUnavailable

from stablebook.boundary.firestore import FirestoreDocumentStore
from stablebook.core.exceptions import RemoteStoreError


def snapshot(document_id: str, data: dict) -> SimpleNamespace:
    return SimpleNamespace(id=document_id, to_dict=lambda: data)


def streaming(*snapshots):
    async def _stream():
        for item in snapshots:
            yield item

    return _stream


@pytest.fixture
def firestore_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def store(firestore_client: MagicMock) -> FirestoreDocumentStore:
    return FirestoreDocumentStore(client=firestore_client)


class TestFetchAll:
    """Collection reads."""

    @pytest.mark.asyncio
    async def test_tenant_filter_and_id_merge(self, store, firestore_client) -> None:
        # Arrange
        collection = firestore_client.collection.return_value
        query = collection.where.return_value
        query.stream = streaming(snapshot("h1", {"name": "Shadow", "userId": "tenant-a"}))

        # Act
        documents = await store.fetch_all("horses", user_id="tenant-a")

        # Assert
        assert documents == [{"name": "Shadow", "userId": "tenant-a", "id": "h1"}]
        firestore_client.collection.assert_called_once_with("horses")
        field_filter = collection.where.call_args.kwargs["filter"]
        assert field_filter.field_path == "userId"
        assert field_filter.value == "tenant-a"

    @pytest.mark.asyncio
    async def test_unfiltered_read_for_admin(self, store, firestore_client) -> None:
        collection = firestore_client.collection.return_value
        collection.stream = streaming(snapshot("v1", {"userId": "a"}), snapshot("v2", {"userId": "b"}))

        documents = await store.fetch_all("visits")

        assert [d["id"] for d in documents] == ["v1", "v2"]
        collection.where.assert_not_called()

    @pytest.mark.asyncio
    async def test_query_failure_wrapped(self, store, firestore_client) -> None:
        async def failing():
            raise ServiceUnavailable("backend down")
            yield  # pragma: no cover

        firestore_client.collection.return_value.stream = failing

        with pytest.raises(RemoteStoreError) as exc_info:
            await store.fetch_all("vaccines")

        assert exc_info.value.details["operation"] == "fetch"

    @pytest.mark.asyncio
    async def test_unknown_collection_rejected(self, store) -> None:
        with pytest.raises(ValueError):
            await store.fetch_all("stables")


class TestWrites:
    """Mirrored writes."""

    @pytest.mark.asyncio
    async def test_add_returns_generated_id(self, store, firestore_client) -> None:
        firestore_client.collection.return_value.add = AsyncMock(return_value=(None, SimpleNamespace(id="new-id")))

        assert await store.add("horses", {"name": "Shadow"}) == "new-id"

    @pytest.mark.asyncio
    async def test_update_missing_document_wrapped(self, store, firestore_client) -> None:
        document = firestore_client.collection.return_value.document.return_value
        document.update = AsyncMock(side_effect=NotFound("no document"))

        with pytest.raises(RemoteStoreError):
            await store.update("horses", "h1", {"age": 8})

        firestore_client.collection.return_value.document.assert_called_once_with("h1")

    @pytest.mark.asyncio
    async def test_delete(self, store, firestore_client) -> None:
        document = firestore_client.collection.return_value.document.return_value
        document.delete = AsyncMock()

        await store.delete("pregnancies", "p1")

        document.delete.assert_awaited_once()
