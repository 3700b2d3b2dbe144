"""
Firestore client for the legacy stable document store.

Reads tenant snapshots for migration and mirrors local writes. Documents
are plain dicts; the document id is exposed as ``id`` alongside the
document fields, matching the shape the migration payload uses.

Dependencies: google-cloud-firestore, google-auth
System role: Remote document store boundary
"""

import logging
from typing import Any

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from google.oauth2 import service_account

from stablebook.core.exceptions import RemoteStoreError

logger = logging.getLogger(__name__)

COLLECTIONS = ("horses", "visits", "vaccines", "pregnancies")
TENANT_FIELD = "userId"


class FirestoreDocumentStore:
    """Async Firestore wrapper over the four stable collections."""

    def __init__(
        self,
        project_id: str | None = None,
        credentials_file: str | None = None,
        client: firestore.AsyncClient | None = None,
    ) -> None:
        """
        Initialize Firestore client.

        Args:
            project_id: Google Cloud project (ambient default when None)
            credentials_file: Service account JSON path (ambient credentials when None)
            client: Pre-built client, used by tests
        """
        if client is None:
            credentials = None
            if credentials_file:
                credentials = service_account.Credentials.from_service_account_file(credentials_file)
            client = firestore.AsyncClient(project=project_id, credentials=credentials)
        self._client = client

    @staticmethod
    def _check_collection(collection: str) -> None:
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection}")

    async def fetch_all(self, collection: str, user_id: str | None = None) -> list[dict[str, Any]]:
        """
        Read every document of a collection.

        Args:
            collection: Collection name
            user_id: Restrict to one tenant; None reads all tenants

        Returns:
            list[dict]: Document fields plus ``id``

        Raises:
            RemoteStoreError: If the query fails
        """
        self._check_collection(collection)
        query = self._client.collection(collection)
        if user_id is not None:
            query = query.where(filter=FieldFilter(TENANT_FIELD, "==", user_id))
        try:
            documents = [
                {**(snapshot.to_dict() or {}), "id": snapshot.id}
                async for snapshot in query.stream()
            ]
        except GoogleAPIError as e:
            raise RemoteStoreError(str(e), collection=collection, operation="fetch") from e
        logger.debug(
            "Fetched remote documents",
            extra={"collection": collection, "count": len(documents), "user_id": user_id},
        )
        return documents

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """
        Create a document with a generated id.

        Args:
            collection: Collection name
            data: Document fields

        Returns:
            str: New document id

        Raises:
            RemoteStoreError: If the write fails
        """
        self._check_collection(collection)
        try:
            _, reference = await self._client.collection(collection).add(data)
        except GoogleAPIError as e:
            raise RemoteStoreError(str(e), collection=collection, operation="add") from e
        return reference.id

    async def update(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        """
        Update fields of an existing document.

        Raises:
            RemoteStoreError: If the document is missing or the write fails
        """
        self._check_collection(collection)
        try:
            await self._client.collection(collection).document(document_id).update(data)
        except GoogleAPIError as e:
            raise RemoteStoreError(str(e), collection=collection, operation="update") from e

    async def delete(self, collection: str, document_id: str) -> None:
        """
        Delete a document.

        Raises:
            RemoteStoreError: If the delete fails
        """
        self._check_collection(collection)
        try:
            await self._client.collection(collection).document(document_id).delete()
        except GoogleAPIError as e:
            raise RemoteStoreError(str(e), collection=collection, operation="delete") from e
