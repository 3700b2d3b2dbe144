"""
Dependency injection container.

Factory functions for FastAPI dependencies: cached boundary clients,
per-request services and header-based tenant resolution.

Dependencies: stablebook.configs, stablebook.application, stablebook.boundary
System role: DI container for service injection
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from stablebook.application.services import (
    ChatService,
    HorseService,
    InsightService,
    MigrationService,
    RecordService,
    RemoteSync,
)
from stablebook.boundary.db import get_async_db
from stablebook.configs import get_settings
from stablebook.core.exceptions import UnauthorizedError
from stablebook.core.tenant import TenantContext


class ServiceCache:
    """Container for cached boundary clients."""

    def __init__(self):
        self._image_storage = None
        self._document_store = None
        self._assistant = None

    @property
    def image_storage(self):
        """Get cached image storage for the configured backend."""
        if self._image_storage is None:
            from stablebook.boundary.storage import LocalImageStorage, S3ImageStorage

            settings = get_settings().storage
            if settings.backend == "s3":
                self._image_storage = S3ImageStorage(bucket=settings.bucket, region=settings.region)
            else:
                self._image_storage = LocalImageStorage(settings.uploads_dir)
        return self._image_storage

    @property
    def document_store(self):
        """Get cached Firestore store, None when the remote store is disabled."""
        settings = get_settings().firestore
        if not settings.enabled:
            return None
        if self._document_store is None:
            from stablebook.boundary.firestore import FirestoreDocumentStore

            self._document_store = FirestoreDocumentStore(
                project_id=settings.project_id,
                credentials_file=settings.credentials_file,
            )
        return self._document_store

    @property
    def assistant(self):
        """Get cached stable assistant."""
        if self._assistant is None:
            from stablebook.core.assistant import StableAssistant

            settings = get_settings()
            self._assistant = StableAssistant(
                api_key=settings.assistant.api_key,
                model_id=settings.assistant.model,
                temperature=settings.assistant.temperature,
                recent_visits=settings.assistant.recent_visits,
                use_prompt_registry=bool(settings.observability.public_key),
                prompt_label=settings.observability.prompt_label,
            )
        return self._assistant

    def clear(self) -> None:
        """Clear all cached instances."""
        self._image_storage = None
        self._document_store = None
        self._assistant = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_tenant(
    x_user_id: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
) -> TenantContext:
    """
    Resolve the calling tenant from request headers.

    ``X-User-Id`` is required; ``X-User-Email`` is matched against the
    configured admin allow-list.

    Raises:
        UnauthorizedError: If the tenant header is missing (rendered as 401)
    """
    if not x_user_id or not x_user_id.strip():
        raise UnauthorizedError()
    email = (x_user_email or "").strip().lower()
    return TenantContext(
        user_id=x_user_id.strip(),
        email=email,
        is_admin=bool(email) and email in get_settings().auth.admin_email_set,
    )


def get_remote_sync(db: AsyncSession = Depends(get_async_db)) -> RemoteSync:
    """
    Get dual-write synchronizer.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        RemoteSync: Synchronizer, inert when Firestore is disabled
    """
    return RemoteSync(db=db, store=get_service_cache().document_store)


def get_migration_service(db: AsyncSession = Depends(get_async_db)) -> MigrationService:
    """
    Get migration service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        MigrationService: Migration engine with image storage and remote store
    """
    cache = get_service_cache()
    return MigrationService(db=db, storage=cache.image_storage, store=cache.document_store)


def get_horse_service(
    db: AsyncSession = Depends(get_async_db),
    sync: RemoteSync = Depends(get_remote_sync),
    migration: MigrationService = Depends(get_migration_service),
) -> HorseService:
    """
    Get horse service instance.

    Returns:
        HorseService: Horse service sharing the request session
    """
    return HorseService(
        db=db,
        storage=get_service_cache().image_storage,
        sync=sync,
        migration=migration,
    )


def get_record_service(
    db: AsyncSession = Depends(get_async_db),
    sync: RemoteSync = Depends(get_remote_sync),
) -> RecordService:
    """
    Get record service instance.

    Returns:
        RecordService: Visit, vaccine and pregnancy service
    """
    return RecordService(db=db, sync=sync)


def get_insight_service(db: AsyncSession = Depends(get_async_db)) -> InsightService:
    """Get insight service instance."""
    return InsightService(db=db)


def get_chat_service(db: AsyncSession = Depends(get_async_db)) -> ChatService:
    """
    Get chat service instance with the stable assistant.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ChatService: Chat service with configured assistant
    """
    return ChatService(db=db, assistant=get_service_cache().assistant)
