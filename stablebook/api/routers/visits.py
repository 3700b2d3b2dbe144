"""
Veterinary visit API endpoints.

Routes:
- GET /visits - List the tenant's visits
- POST /visits - Record a visit for one of the tenant's horses
- DELETE /visits/{id} - Delete a visit
- PATCH /visits/{id}/firebase-id - Record the remote document id

Dependencies: stablebook.application.services, stablebook.models
System role: Veterinary visit HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from stablebook.api.deps.dependencies import get_record_service, get_tenant
from stablebook.api.routers.router_utils import handle_record_errors
from stablebook.application.services import RecordService
from stablebook.core.tenant import TenantContext
from stablebook.models.common import DeleteResponse, RemoteIdRequest, SuccessResponse
from stablebook.models.visit import CreateVisitRequest, VisitResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/visits", tags=["visits"])


@router.get("", response_model=list[VisitResponse])
@handle_record_errors
async def list_visits(
    tenant: TenantContext = Depends(get_tenant),
    record_service: RecordService = Depends(get_record_service),
) -> list[VisitResponse]:
    """List the tenant's visits, most recent visit date first."""
    records = await record_service.list_visits(tenant)
    return [VisitResponse.model_validate(record) for record in records]


@router.post("", response_model=VisitResponse, status_code=201)
@handle_record_errors
async def create_visit(
    request: CreateVisitRequest,
    tenant: TenantContext = Depends(get_tenant),
    record_service: RecordService = Depends(get_record_service),
) -> VisitResponse:
    """
    Record a visit.

    Raises:
        HTTPException(404): Horse not found for this tenant
    """
    logger.info("Creating visit", extra={"user_id": tenant.user_id, "horse_id": request.horse_id})
    record = await record_service.create_visit(tenant, request)
    return VisitResponse.model_validate(record)


@router.delete("/{record_id}", response_model=DeleteResponse, response_model_exclude_unset=True)
@handle_record_errors
async def delete_visit(
    record_id: int,
    tenant: TenantContext = Depends(get_tenant),
    record_service: RecordService = Depends(get_record_service),
) -> DeleteResponse:
    """Delete a visit and its remote document."""
    removed = await record_service.delete_record(tenant, "visits", record_id)
    return DeleteResponse(success=True, firebase_id=removed.firebase_id)


@router.patch("/{record_id}/firebase-id", response_model=SuccessResponse)
@handle_record_errors
async def set_visit_remote_id(
    record_id: int,
    request: RemoteIdRequest,
    tenant: TenantContext = Depends(get_tenant),
    record_service: RecordService = Depends(get_record_service),
) -> SuccessResponse:
    """Record the remote document id of a visit."""
    await record_service.set_remote_id(tenant, "visits", record_id, request.firebase_id)
    return SuccessResponse()
