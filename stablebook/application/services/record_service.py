"""
Record service orchestrator.

Coordinates visits, vaccines and pregnancies: the create/delete-only
records that hang off a horse. Every create checks that the referenced
horse belongs to the caller, and every write is mirrored remotely.

Dependencies: stablebook.boundary.db.CRUD, stablebook.application.services.sync_service
System role: Horse record use case orchestration
"""

import logging
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from stablebook.application.services.sync_service import CRUD_BY_COLLECTION, RemoteSync
from stablebook.boundary.db.CRUD import horse_crud, pregnancy_crud, vaccine_crud, visit_crud
from stablebook.boundary.db.models import (
    Gender,
    HorseModel,
    PregnancyModel,
    VaccineModel,
    VisitModel,
)
from stablebook.core.exceptions import RecordNotFoundError, ValidationError
from stablebook.core.gestation import expected_foaling_date
from stablebook.core.tenant import TenantContext
from stablebook.models.pregnancy import CreatePregnancyRequest
from stablebook.models.vaccine import CreateVaccineRequest
from stablebook.models.visit import CreateVisitRequest

logger = logging.getLogger(__name__)

ENTITY_NAMES = {
    "visits": "visit",
    "vaccines": "vaccine",
    "pregnancies": "pregnancy",
}


class RecordService:
    """Visit, vaccine and pregnancy orchestrator."""

    def __init__(self, db: AsyncSession, sync: RemoteSync) -> None:
        """
        Initialize record service.

        Args:
            db: Async SQLAlchemy session
            sync: Dual-write synchronizer
        """
        self.db = db
        self.sync = sync

    async def _horse_for(self, tenant: TenantContext, horse_id: int) -> HorseModel:
        if tenant.is_admin:
            horse = await horse_crud.get_any(self.db, horse_id)
        else:
            horse = await horse_crud.get(self.db, horse_id, tenant.user_id)
        if horse is None:
            raise RecordNotFoundError("horse", horse_id)
        return horse

    async def _create(
        self,
        collection: str,
        tenant: TenantContext,
        horse: HorseModel,
        **fields: Any,
    ) -> Any:
        crud = CRUD_BY_COLLECTION[collection]
        try:
            record = await crud.create(self.db, tenant.user_id, horse_id=horse.id, **fields)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to create record",
                extra={"collection": collection, "horse_id": horse.id, "error": str(e)},
            )
            raise

        logger.info(
            "Record created",
            extra={"collection": collection, "record_id": record.id, "horse_id": horse.id},
        )
        await self.sync.mirror_create(collection, record, horse_remote_id=horse.firebase_id)
        return record

    async def list_visits(self, tenant: TenantContext) -> Sequence[VisitModel]:
        """Tenant's visits, most recent date first."""
        return await visit_crud.list_for_tenant(self.db, tenant.user_id)

    async def list_vaccines(self, tenant: TenantContext) -> Sequence[VaccineModel]:
        """Tenant's vaccines, most recent date first."""
        return await vaccine_crud.list_for_tenant(self.db, tenant.user_id)

    async def list_pregnancies(self, tenant: TenantContext) -> Sequence[PregnancyModel]:
        """Tenant's pregnancies, newest first."""
        return await pregnancy_crud.list_for_tenant(self.db, tenant.user_id)

    async def create_visit(self, tenant: TenantContext, request: CreateVisitRequest) -> VisitModel:
        """
        Record a veterinary visit.

        Raises:
            RecordNotFoundError: If the horse is not visible to the caller
        """
        horse = await self._horse_for(tenant, request.horse_id)
        return await self._create(
            "visits",
            tenant,
            horse,
            date=request.date,
            vet_name=request.vet_name,
            type=request.type,
            notes=request.notes,
        )

    async def create_vaccine(self, tenant: TenantContext, request: CreateVaccineRequest) -> VaccineModel:
        """
        Record a vaccination.

        Raises:
            RecordNotFoundError: If the horse is not visible to the caller
        """
        horse = await self._horse_for(tenant, request.horse_id)
        return await self._create(
            "vaccines",
            tenant,
            horse,
            type=request.type,
            date=request.date,
            next_date=request.next_date,
            notes=request.notes,
        )

    async def create_pregnancy(self, tenant: TenantContext, request: CreatePregnancyRequest) -> PregnancyModel:
        """
        Record a pregnancy; the expected date is mating date + 340 days.

        Raises:
            RecordNotFoundError: If the horse is not visible to the caller
            ValidationError: If the horse is not a mare
        """
        horse = await self._horse_for(tenant, request.horse_id)
        if horse.gender != Gender.FEMALE:
            raise ValidationError("Pregnancies can only be recorded for female horses", field="horseId")
        return await self._create(
            "pregnancies",
            tenant,
            horse,
            mating_date=request.mating_date,
            stallion_name=request.stallion_name,
            status=request.status,
            expected_date=expected_foaling_date(request.mating_date),
        )

    async def delete_record(self, tenant: TenantContext, collection: str, record_id: int) -> Any:
        """
        Delete one of the tenant's records and its remote document.

        Args:
            tenant: Caller context
            collection: visits, vaccines or pregnancies
            record_id: Local identifier

        Returns:
            The removed record (carrying its remote id)

        Raises:
            RecordNotFoundError: If the record is not owned by the tenant
        """
        crud = CRUD_BY_COLLECTION[collection]
        removed = await crud.delete(self.db, record_id, tenant.user_id)
        if removed is None:
            raise RecordNotFoundError(ENTITY_NAMES[collection], record_id)
        await self.db.commit()

        logger.info(
            "Record deleted",
            extra={"collection": collection, "record_id": record_id, "user_id": tenant.user_id},
        )
        await self.sync.mirror_delete(collection, removed.firebase_id)
        return removed

    async def set_remote_id(
        self,
        tenant: TenantContext,
        collection: str,
        record_id: int,
        firebase_id: str,
    ) -> None:
        """
        Record a remote id mirrored by the client.

        Raises:
            RecordNotFoundError: If the record is not visible to the caller
        """
        crud = CRUD_BY_COLLECTION[collection]
        if tenant.is_admin:
            record = await crud.get_any(self.db, record_id)
        else:
            record = await crud.get(self.db, record_id, tenant.user_id)
        if record is None:
            raise RecordNotFoundError(ENTITY_NAMES[collection], record_id)
        await crud.set_remote_id(self.db, record_id, firebase_id)
        await self.db.commit()
