"""
Horse service orchestrator.

Coordinates horse lifecycle operations: image storage, local persistence,
cascade deletion and dual-write mirroring. An empty horse list triggers
the automatic legacy migration when the remote store is enabled.

Dependencies: stablebook.boundary.db.CRUD, stablebook.boundary.storage,
    stablebook.application.services
System role: Horse use case orchestration
"""

import logging
from typing import Sequence

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from stablebook.application.services.migration_service import MigrationService
from stablebook.application.services.sync_service import RemoteSync
from stablebook.boundary.db.CRUD import CascadeDeleteResult, horse_crud
from stablebook.boundary.db.models import HorseModel
from stablebook.boundary.storage import DecodedImage, ImageStorage
from stablebook.core.exceptions import RecordNotFoundError
from stablebook.core.tenant import TenantContext
from stablebook.models.horse import HorseFormData

logger = logging.getLogger(__name__)


class HorseService:
    """Horse service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        storage: ImageStorage,
        sync: RemoteSync,
        migration: MigrationService | None = None,
    ) -> None:
        """
        Initialize horse service.

        Args:
            db: Async SQLAlchemy session
            storage: Image storage for photos and certificates
            sync: Dual-write synchronizer
            migration: Migration engine used on an empty list (optional)
        """
        self.db = db
        self.storage = storage
        self.sync = sync
        self.migration = migration

    async def _list(self, tenant: TenantContext) -> Sequence[HorseModel]:
        if tenant.is_admin:
            return await horse_crud.list_all(self.db)
        return await horse_crud.list_for_tenant(self.db, tenant.user_id)

    async def list_horses(self, tenant: TenantContext) -> Sequence[HorseModel]:
        """
        List horses visible to the caller (admin: every tenant's).

        When the list is empty and the remote store is enabled, the legacy
        records are migrated first and the list is read again.

        Args:
            tenant: Caller context

        Returns:
            Sequence of horses, newest first
        """
        horses = await self._list(tenant)
        if horses or self.migration is None or not self.migration.remote_enabled:
            return horses

        report = await self.migration.auto_migrate(tenant)
        if report.imported.horses:
            logger.info(
                "Migrated legacy horses on first access",
                extra={"user_id": tenant.user_id, "horses": report.imported.horses},
            )
            horses = await self._list(tenant)
        return horses

    async def _save_image(self, image: DecodedImage | None) -> str | None:
        if image is None:
            return None
        return await run_in_threadpool(self.storage.save, image.content, image.extension)

    async def _discard_images(self, *references: str | None) -> None:
        for reference in references:
            if not reference:
                continue
            try:
                await run_in_threadpool(self.storage.delete, reference)
            except Exception as e:
                logger.warning("Failed to delete image", extra={"reference": reference, "error": str(e)})

    async def create_horse(
        self,
        tenant: TenantContext,
        form: HorseFormData,
        image: DecodedImage | None = None,
        cert_image: DecodedImage | None = None,
    ) -> HorseModel:
        """
        Create a horse, storing any uploaded images, then mirror it.

        Args:
            tenant: Caller context
            form: Validated form fields
            image: Uploaded photo (optional)
            cert_image: Uploaded pedigree certificate (optional)

        Returns:
            HorseModel: Created horse (remote id set if mirroring succeeded)

        Raises:
            ImageStorageError: If an image cannot be stored
        """
        image_ref = await self._save_image(image)
        cert_ref = await self._save_image(cert_image)
        try:
            horse = await horse_crud.create(
                self.db,
                tenant.user_id,
                **form.model_dump(),
                image=image_ref,
                cert_image=cert_ref,
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            await self._discard_images(image_ref, cert_ref)
            logger.error("Failed to create horse", extra={"error": str(e), "user_id": tenant.user_id})
            raise

        logger.info("Horse created", extra={"horse_id": horse.id, "user_id": tenant.user_id})
        await self.sync.mirror_create("horses", horse)
        return horse

    async def update_horse(
        self,
        tenant: TenantContext,
        horse_id: int,
        form: HorseFormData,
        image: DecodedImage | None = None,
        cert_image: DecodedImage | None = None,
    ) -> HorseModel:
        """
        Edit a tenant's horse; a replaced image deletes the previous file.

        Raises:
            RecordNotFoundError: If the horse is not owned by the tenant
        """
        existing = await horse_crud.get(self.db, horse_id, tenant.user_id)
        if existing is None:
            raise RecordNotFoundError("horse", horse_id)
        old_image, old_cert = existing.image, existing.cert_image

        fields = form.model_dump()
        new_image = await self._save_image(image)
        new_cert = await self._save_image(cert_image)
        if new_image:
            fields["image"] = new_image
        if new_cert:
            fields["cert_image"] = new_cert

        try:
            horse = await horse_crud.update(self.db, horse_id, tenant.user_id, **fields)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            await self._discard_images(new_image, new_cert)
            logger.error("Failed to update horse", extra={"error": str(e), "horse_id": horse_id})
            raise

        await self._discard_images(
            old_image if new_image else None,
            old_cert if new_cert else None,
        )
        logger.info("Horse updated", extra={"horse_id": horse_id, "user_id": tenant.user_id})
        await self.sync.mirror_horse_update(horse)
        return horse

    async def delete_horse(self, tenant: TenantContext, horse_id: int) -> CascadeDeleteResult:
        """
        Delete a horse with all its visits, vaccines and pregnancies.

        Admins may delete any tenant's horse. Image files are removed and
        the remote documents of every removed record are deleted.

        Args:
            tenant: Caller context
            horse_id: Local horse identifier

        Returns:
            CascadeDeleteResult: Removed records with their remote ids

        Raises:
            RecordNotFoundError: If the horse does not exist or is not owned
        """
        try:
            if tenant.is_admin:
                result = await horse_crud.delete_any(self.db, horse_id)
            else:
                result = await horse_crud.delete_cascade(self.db, horse_id, tenant.user_id)
            if result is None:
                raise RecordNotFoundError("horse", horse_id)
            await self.db.commit()
        except RecordNotFoundError:
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to delete horse", extra={"error": str(e), "horse_id": horse_id})
            raise

        logger.info(
            "Horse deleted",
            extra={"horse_id": horse_id, "user_id": tenant.user_id, "removed": result.removed_count},
        )
        await self._discard_images(result.horse.image, result.horse.cert_image)
        await self.sync.mirror_cascade(result)
        return result

    async def set_remote_id(self, tenant: TenantContext, horse_id: int, firebase_id: str) -> None:
        """
        Record a remote id mirrored by the client.

        Raises:
            RecordNotFoundError: If the horse is not visible to the caller
        """
        if tenant.is_admin:
            horse = await horse_crud.get_any(self.db, horse_id)
        else:
            horse = await horse_crud.get(self.db, horse_id, tenant.user_id)
        if horse is None:
            raise RecordNotFoundError("horse", horse_id)
        await horse_crud.set_remote_id(self.db, horse_id, firebase_id)
        await self.db.commit()
