"""
Dual-write synchronizer.

Mirrors user-initiated local writes into the remote document store and
records the resulting document id locally. Mirroring is best-effort: the
local write has already committed, remote failures are logged and
swallowed, and there are no retries.

Dependencies: stablebook.boundary.firestore, stablebook.boundary.db.CRUD
System role: Eventual consistency with the legacy document store
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from stablebook.boundary.db.CRUD import (
    CascadeDeleteResult,
    horse_crud,
    pregnancy_crud,
    vaccine_crud,
    visit_crud,
)
from stablebook.boundary.db.models import HorseModel
from stablebook.boundary.firestore import TENANT_FIELD, FirestoreDocumentStore

logger = logging.getLogger(__name__)

CRUD_BY_COLLECTION = {
    "horses": horse_crud,
    "visits": visit_crud,
    "vaccines": vaccine_crud,
    "pregnancies": pregnancy_crud,
}


def _iso(value: Any) -> str | None:
    return value.isoformat() if value is not None else None


def _enum(value: Any) -> Any:
    return getattr(value, "value", value)


def horse_document_fields(horse: HorseModel) -> dict[str, Any]:
    """Fields mirrored on horse update."""
    return {
        "name": horse.name,
        "age": horse.age,
        "breed": horse.breed,
        "gender": _enum(horse.gender),
    }


def build_document(collection: str, record: Any, horse_remote_id: str | None = None) -> dict[str, Any]:
    """
    Build the remote document for a local record.

    Dependent records reference the parent horse's remote id when it has
    one, else its local id.

    Args:
        collection: Remote collection name
        record: Local ORM record
        horse_remote_id: Remote id of the parent horse, if known

    Returns:
        dict: Document fields, camelCase, tenant field included
    """
    document: dict[str, Any] = {TENANT_FIELD: record.user_id}
    if collection == "horses":
        document.update(horse_document_fields(record))
        document.update({
            "fatherName": record.father_name,
            "motherName": record.mother_name,
        })
        return document

    document["horseId"] = horse_remote_id or str(record.horse_id)
    if collection == "visits":
        document.update({
            "date": _iso(record.date),
            "vetName": record.vet_name,
            "type": _enum(record.type),
            "notes": record.notes,
        })
    elif collection == "vaccines":
        document.update({
            "type": record.type,
            "date": _iso(record.date),
            "nextDate": _iso(record.next_date),
            "notes": record.notes,
        })
    elif collection == "pregnancies":
        document.update({
            "matingDate": _iso(record.mating_date),
            "stallionName": record.stallion_name,
            "status": _enum(record.status),
            "expectedDate": _iso(record.expected_date),
        })
    else:
        raise ValueError(f"Unknown collection: {collection}")
    return document


class RemoteSync:
    """
    Best-effort mirror of local writes.

    A None store disables mirroring; every call is then a logged no-op.
    """

    def __init__(self, db: AsyncSession, store: FirestoreDocumentStore | None) -> None:
        """
        Initialize synchronizer.

        Args:
            db: Async SQLAlchemy session used to persist remote ids
            store: Remote document store, None when mirroring is disabled
        """
        self.db = db
        self.store = store

    @property
    def enabled(self) -> bool:
        return self.store is not None

    async def mirror_create(
        self,
        collection: str,
        record: Any,
        horse_remote_id: str | None = None,
    ) -> str | None:
        """
        Create the remote document for a committed local record.

        On success the remote id is stored on the local row and committed.

        Args:
            collection: Remote collection name
            record: Committed local record
            horse_remote_id: Remote id of the parent horse (dependent records)

        Returns:
            str: Remote id, or None when disabled or the remote write failed
        """
        if not self.enabled:
            logger.debug("Remote mirroring disabled", extra={"collection": collection})
            return None

        try:
            remote_id = await self.store.add(
                collection, build_document(collection, record, horse_remote_id)
            )
        except Exception as e:
            logger.warning(
                "Remote create failed",
                extra={"collection": collection, "record_id": record.id, "error": str(e)},
            )
            return None

        await CRUD_BY_COLLECTION[collection].set_remote_id(self.db, record.id, remote_id)
        await self.db.commit()
        logger.info(
            "Mirrored record",
            extra={"collection": collection, "record_id": record.id, "firebase_id": remote_id},
        )
        return remote_id

    async def mirror_horse_update(self, horse: HorseModel) -> bool:
        """
        Update the remote horse document.

        Skipped when the horse has never been mirrored.

        Returns:
            bool: True if the remote document was updated
        """
        if not self.enabled or not horse.firebase_id:
            return False
        try:
            await self.store.update("horses", horse.firebase_id, horse_document_fields(horse))
        except Exception as e:
            logger.warning(
                "Remote update failed",
                extra={"record_id": horse.id, "firebase_id": horse.firebase_id, "error": str(e)},
            )
            return False
        return True

    async def mirror_delete(self, collection: str, remote_id: str | None) -> bool:
        """
        Delete one remote document.

        Returns:
            bool: True if the remote document was deleted
        """
        if not self.enabled or not remote_id:
            return False
        try:
            await self.store.delete(collection, remote_id)
        except Exception as e:
            logger.warning(
                "Remote delete failed",
                extra={"collection": collection, "firebase_id": remote_id, "error": str(e)},
            )
            return False
        return True

    async def mirror_cascade(self, result: CascadeDeleteResult) -> int:
        """
        Delete the remote documents of a cascaded horse deletion.

        The horse document and every dependent document are deleted
        independently; one failure does not stop the others.

        Args:
            result: Records removed by the local cascade

        Returns:
            int: Number of remote documents deleted
        """
        if not self.enabled:
            return 0
        deleted = int(await self.mirror_delete("horses", result.horse.firebase_id))
        for collection, remote_ids in result.remote_ids().items():
            for remote_id in remote_ids:
                deleted += int(await self.mirror_delete(collection, remote_id))
        logger.info(
            "Mirrored cascade delete",
            extra={"horse_id": result.horse.id, "remote_deleted": deleted},
        )
        return deleted
