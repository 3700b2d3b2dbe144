"""
Pregnancy API endpoints.

Routes:
- GET /pregnancies - List the tenant's pregnancies
- POST /pregnancies - Record a pregnancy for one of the tenant's horses
- DELETE /pregnancies/{id} - Delete a pregnancy
- PATCH /pregnancies/{id}/firebase-id - Record the remote document id

Dependencies: stablebook.application.services, stablebook.models
System role: Pregnancy HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from stablebook.api.deps.dependencies import get_record_service, get_tenant
from stablebook.api.routers.router_utils import handle_record_errors
from stablebook.application.services import RecordService
from stablebook.core.tenant import TenantContext
from stablebook.models.common import DeleteResponse, RemoteIdRequest, SuccessResponse
from stablebook.models.pregnancy import CreatePregnancyRequest, PregnancyResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pregnancies", tags=["pregnancies"])


@router.get("", response_model=list[PregnancyResponse])
@handle_record_errors
async def list_pregnancies(
    tenant: TenantContext = Depends(get_tenant),
    record_service: RecordService = Depends(get_record_service),
) -> list[PregnancyResponse]:
    """List the tenant's pregnancies."""
    records = await record_service.list_pregnancies(tenant)
    return [PregnancyResponse.model_validate(record) for record in records]


@router.post("", response_model=PregnancyResponse, status_code=201)
@handle_record_errors
async def create_pregnancy(
    request: CreatePregnancyRequest,
    tenant: TenantContext = Depends(get_tenant),
    record_service: RecordService = Depends(get_record_service),
) -> PregnancyResponse:
    """
    Record a pregnancy; the expected foaling date is computed as the
    mating date plus 340 days.

    Raises:
        HTTPException(400): Horse is not a mare
        HTTPException(404): Horse not found for this tenant
    """
    logger.info("Creating pregnancy", extra={"user_id": tenant.user_id, "horse_id": request.horse_id})
    record = await record_service.create_pregnancy(tenant, request)
    return PregnancyResponse.model_validate(record)


@router.delete("/{record_id}", response_model=DeleteResponse, response_model_exclude_unset=True)
@handle_record_errors
async def delete_pregnancy(
    record_id: int,
    tenant: TenantContext = Depends(get_tenant),
    record_service: RecordService = Depends(get_record_service),
) -> DeleteResponse:
    """
    Delete a pregnancy.

    Raises:
        HTTPException(404): Record not found for this tenant
    """
    removed = await record_service.delete_record(tenant, "pregnancies", record_id)
    return DeleteResponse(success=True, firebase_id=removed.firebase_id)


@router.patch("/{record_id}/firebase-id", response_model=SuccessResponse)
@handle_record_errors
async def set_pregnancy_remote_id(
    record_id: int,
    request: RemoteIdRequest,
    tenant: TenantContext = Depends(get_tenant),
    record_service: RecordService = Depends(get_record_service),
) -> SuccessResponse:
    """Record the remote document id of a pregnancy."""
    await record_service.set_remote_id(tenant, "pregnancies", record_id, request.firebase_id)
    return SuccessResponse()
