"""
Migration engine.

Imports a snapshot of legacy remote documents into the local store:
horses first (inline images decoded into stored files), then visits,
vaccines and pregnancies with their ``horseId`` re-keyed from remote to
local ids. Records pointing at a horse outside the snapshot are dropped.

The only idempotence guard is the tenant's local horse count: a tenant
that already has horses is never migrated again.

Dependencies: stablebook.boundary.db.CRUD, stablebook.boundary.storage,
    stablebook.boundary.firestore
System role: One-time legacy data import
"""

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Any, Iterable

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from stablebook.boundary.db.CRUD import horse_crud, pregnancy_crud, vaccine_crud, visit_crud
from stablebook.boundary.db.models import Gender, PregnancyStatus, VisitType
from stablebook.boundary.firestore import COLLECTIONS, TENANT_FIELD, FirestoreDocumentStore
from stablebook.boundary.storage import ImageStorage, decode_image_data_url, is_data_url
from stablebook.core.gestation import expected_foaling_date
from stablebook.core.legacy_labels import (
    GENDER_LABELS,
    PREGNANCY_STATUS_LABELS,
    VISIT_TYPE_LABELS,
    normalize_label,
)
from stablebook.core.tenant import TenantContext
from stablebook.models.migration import ImportCounts, MigrationReport, MigrationRequest

logger = logging.getLogger(__name__)


def parse_date(value: Any) -> date | None:
    """
    Parse a legacy date field.

    Accepts ``YYYY-MM-DD`` strings, ISO timestamps and Firestore timestamps
    (datetime subclasses). Empty values yield None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _int(value: Any) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


class MigrationService:
    """Legacy document import orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        storage: ImageStorage,
        store: FirestoreDocumentStore | None = None,
    ) -> None:
        """
        Initialize migration service.

        Args:
            db: Async SQLAlchemy session
            storage: Image storage for decoded inline images
            store: Remote document store; None disables automatic migration
        """
        self.db = db
        self.storage = storage
        self.store = store

    @property
    def remote_enabled(self) -> bool:
        return self.store is not None

    async def _store_image(self, value: Any, remote_id: str | None, stored: list[str]) -> str | None:
        if not isinstance(value, str) or not is_data_url(value):
            return None
        decoded = decode_image_data_url(value)
        if decoded is None:
            logger.warning("Skipping undecodable image", extra={"firebase_id": remote_id})
            return None
        reference = await run_in_threadpool(self.storage.save, decoded.content, decoded.extension)
        stored.append(reference)
        return reference

    async def _discard_images(self, references: list[str]) -> None:
        for reference in references:
            try:
                await run_in_threadpool(self.storage.delete, reference)
            except Exception as e:
                logger.warning("Failed to delete image", extra={"reference": reference, "error": str(e)})

    async def _import(
        self,
        user_id: str,
        horses: Iterable[dict[str, Any]],
        visits: Iterable[dict[str, Any]],
        vaccines: Iterable[dict[str, Any]],
        pregnancies: Iterable[dict[str, Any]],
        stored: list[str],
    ) -> ImportCounts:
        """
        Insert one tenant's documents; flushes but does not commit.

        Image references written along the way are appended to ``stored``
        so the caller can remove them if the transaction is rolled back.
        """
        counts = ImportCounts()
        id_mapping: dict[str, int] = {}

        for doc in horses:
            remote_id = _text(doc.get("id"))
            horse = await horse_crud.create(
                self.db,
                user_id,
                name=_text(doc.get("name")) or "",
                age=_int(doc.get("age")),
                breed=_text(doc.get("breed")) or "",
                gender=Gender(normalize_label(doc.get("gender"), GENDER_LABELS, "male")),
                image=await self._store_image(doc.get("image"), remote_id, stored),
                father_name=_text(doc.get("fatherName")),
                mother_name=_text(doc.get("motherName")),
                cert_image=await self._store_image(doc.get("certImage"), remote_id, stored),
                firebase_id=remote_id,
            )
            if remote_id:
                id_mapping[remote_id] = horse.id
            counts.horses += 1

        for doc in visits:
            horse_id = id_mapping.get(_text(doc.get("horseId")) or "")
            visit_date = parse_date(doc.get("date"))
            if horse_id is None:
                continue
            if visit_date is None:
                logger.warning("Skipping visit without date", extra={"firebase_id": doc.get("id")})
                continue
            await visit_crud.create(
                self.db,
                user_id,
                horse_id=horse_id,
                date=visit_date,
                vet_name=_text(doc.get("vetName")) or "",
                type=VisitType(normalize_label(doc.get("type"), VISIT_TYPE_LABELS, "routine")),
                notes=_text(doc.get("notes")),
                firebase_id=_text(doc.get("id")),
            )
            counts.visits += 1

        for doc in vaccines:
            horse_id = id_mapping.get(_text(doc.get("horseId")) or "")
            given = parse_date(doc.get("date"))
            if horse_id is None:
                continue
            if given is None:
                logger.warning("Skipping vaccine without date", extra={"firebase_id": doc.get("id")})
                continue
            await vaccine_crud.create(
                self.db,
                user_id,
                horse_id=horse_id,
                type=_text(doc.get("type")) or "",
                date=given,
                next_date=parse_date(doc.get("nextDate")),
                notes=_text(doc.get("notes")),
                firebase_id=_text(doc.get("id")),
            )
            counts.vaccines += 1

        for doc in pregnancies:
            horse_id = id_mapping.get(_text(doc.get("horseId")) or "")
            mating = parse_date(doc.get("matingDate"))
            if horse_id is None:
                continue
            if mating is None:
                logger.warning("Skipping pregnancy without mating date", extra={"firebase_id": doc.get("id")})
                continue
            await pregnancy_crud.create(
                self.db,
                user_id,
                horse_id=horse_id,
                mating_date=mating,
                stallion_name=_text(doc.get("stallionName")) or "",
                status=PregnancyStatus(normalize_label(doc.get("status"), PREGNANCY_STATUS_LABELS, "pending")),
                expected_date=expected_foaling_date(mating),
                firebase_id=_text(doc.get("id")),
            )
            counts.pregnancies += 1

        return counts

    async def import_snapshot(self, user_id: str, snapshot: MigrationRequest) -> ImportCounts:
        """
        Import a snapshot for one tenant in a single transaction.

        Does nothing when the tenant already has local horses.

        Args:
            user_id: Tenant that will own the imported records
            snapshot: Remote documents, each with its remote id in ``id``

        Returns:
            ImportCounts: Records actually inserted

        Raises:
            Exception: If a local write fails (the transaction is rolled back)
        """
        if await horse_crud.count_for_tenant(self.db, user_id) > 0:
            logger.info("Tenant already has local horses, skipping migration", extra={"user_id": user_id})
            return ImportCounts()

        stored: list[str] = []
        try:
            counts = await self._import(
                user_id,
                snapshot.horses,
                snapshot.visits,
                snapshot.vaccines,
                snapshot.pregnancies,
                stored,
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            await self._discard_images(stored)
            logger.error("Migration failed", extra={"user_id": user_id, "error": str(e)})
            raise

        logger.info("Migration completed", extra={"user_id": user_id, **counts.model_dump()})
        return counts

    async def _fetch_snapshot(self, user_id: str | None) -> dict[str, list[dict[str, Any]]]:
        """Fetch remote documents; the record collections are skipped when there are no horses."""
        snapshot = {collection: [] for collection in COLLECTIONS}
        snapshot["horses"] = await self.store.fetch_all("horses", user_id=user_id)
        if not snapshot["horses"]:
            return snapshot
        for collection in COLLECTIONS:
            if collection != "horses":
                snapshot[collection] = await self.store.fetch_all(collection, user_id=user_id)
        return snapshot

    @staticmethod
    def group_by_tenant(documents: dict[str, list[dict[str, Any]]]) -> dict[str, MigrationRequest]:
        """
        Partition an unfiltered snapshot by the embedded tenant field.

        Documents without a tenant field are dropped.
        """
        grouped: dict[str, dict[str, list]] = defaultdict(lambda: {c: [] for c in COLLECTIONS})
        for collection, docs in documents.items():
            for doc in docs:
                owner = _text(doc.get(TENANT_FIELD))
                if owner is None:
                    logger.warning(
                        "Dropping document without tenant",
                        extra={"collection": collection, "firebase_id": doc.get("id")},
                    )
                    continue
                grouped[owner][collection].append(doc)
        return {owner: MigrationRequest(**docs) for owner, docs in grouped.items()}

    async def auto_migrate(self, tenant: TenantContext) -> MigrationReport:
        """
        Import the caller's remote records (admin: every tenant's).

        Each tenant group is guarded and committed on its own; a failing
        group is logged and recorded in the report while the others
        proceed. Remote read failures are never raised.

        Args:
            tenant: Caller context

        Returns:
            MigrationReport: Per-tenant counts and failed tenant ids
        """
        if not self.remote_enabled:
            return MigrationReport(skipped=True)

        try:
            if tenant.is_admin:
                groups = self.group_by_tenant(await self._fetch_snapshot(None))
            else:
                groups = {tenant.user_id: MigrationRequest(**await self._fetch_snapshot(tenant.user_id))}
        except Exception as e:
            logger.warning("Remote snapshot fetch failed", extra={"user_id": tenant.user_id, "error": str(e)})
            return MigrationReport(success=False, failed_tenants=[tenant.user_id])

        report = MigrationReport()
        for user_id, snapshot in groups.items():
            if not snapshot.horses:
                continue
            try:
                counts = await self.import_snapshot(user_id, snapshot)
            except Exception:
                report.failed_tenants.append(user_id)
                continue
            report.tenants[user_id] = counts
            report.imported = report.imported.add(counts)

        report.success = not report.failed_tenants
        report.skipped = not report.tenants and not report.failed_tenants
        logger.info(
            "Automatic migration finished",
            extra={
                "user_id": tenant.user_id,
                "tenants": len(report.tenants),
                "failed": len(report.failed_tenants),
            },
        )
        return report
