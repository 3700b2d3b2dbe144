"""
Migration API endpoints.

Routes:
- POST /migrate - Import a snapshot of legacy documents supplied by the client
- POST /migrate/remote - Import the caller's records from the remote store now

Dependencies: stablebook.application.services, stablebook.models
System role: Legacy data import HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from stablebook.api.deps.dependencies import get_migration_service, get_tenant
from stablebook.api.routers.router_utils import handle_record_errors
from stablebook.application.services import MigrationService
from stablebook.core.tenant import TenantContext
from stablebook.models.migration import MigrationReport, MigrationRequest, MigrationResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/migrate", tags=["migration"])


@router.post("", response_model=MigrationResponse)
@handle_record_errors
async def migrate_snapshot(
    request: MigrationRequest,
    tenant: TenantContext = Depends(get_tenant),
    migration_service: MigrationService = Depends(get_migration_service),
) -> MigrationResponse:
    """
    Import legacy documents into the caller's stable.

    Each item carries its remote id in ``id``; visits, vaccines and
    pregnancies reference horses by remote id in ``horseId``. A tenant
    that already has horses imports nothing.

    Returns:
        MigrationResponse: Records inserted per entity type
    """
    logger.info(
        "Snapshot migration requested",
        extra={"user_id": tenant.user_id, "horses": len(request.horses)},
    )
    counts = await migration_service.import_snapshot(tenant.user_id, request)
    return MigrationResponse(imported=counts)


@router.post("/remote", response_model=MigrationReport)
@handle_record_errors
async def migrate_remote(
    tenant: TenantContext = Depends(get_tenant),
    migration_service: MigrationService = Depends(get_migration_service),
) -> MigrationReport:
    """
    Run the automatic migration from the remote store.

    Admins import every tenant's records, each tenant independently.
    """
    return await migration_service.auto_migrate(tenant)
