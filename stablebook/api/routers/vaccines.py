"""
Vaccination API endpoints.

Routes:
- GET /vaccines - List the tenant's vaccines
- POST /vaccines - Record a vaccination (optional next due date)
- DELETE /vaccines/{id} - Delete a vaccine
- PATCH /vaccines/{id}/firebase-id - Record the remote document id

Dependencies: stablebook.application.services, stablebook.models
System role: Vaccination HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from stablebook.api.deps.dependencies import get_record_service, get_tenant
from stablebook.api.routers.router_utils import handle_record_errors
from stablebook.application.services import RecordService
from stablebook.core.tenant import TenantContext
from stablebook.models.common import DeleteResponse, RemoteIdRequest, SuccessResponse
from stablebook.models.vaccine import CreateVaccineRequest, VaccineResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vaccines", tags=["vaccines"])


@router.get("", response_model=list[VaccineResponse])
@handle_record_errors
async def list_vaccines(
    tenant: TenantContext = Depends(get_tenant),
    record_service: RecordService = Depends(get_record_service),
) -> list[VaccineResponse]:
    """List the tenant's vaccines."""
    records = await record_service.list_vaccines(tenant)
    return [VaccineResponse.model_validate(record) for record in records]


@router.post("", response_model=VaccineResponse, status_code=201)
@handle_record_errors
async def create_vaccine(
    request: CreateVaccineRequest,
    tenant: TenantContext = Depends(get_tenant),
    record_service: RecordService = Depends(get_record_service),
) -> VaccineResponse:
    """
    Record a vaccine.

    Raises:
        HTTPException(404): Horse not found for this tenant
    """
    logger.info("Creating vaccine", extra={"user_id": tenant.user_id, "horse_id": request.horse_id})
    record = await record_service.create_vaccine(tenant, request)
    return VaccineResponse.model_validate(record)


@router.delete("/{record_id}", response_model=DeleteResponse, response_model_exclude_unset=True)
@handle_record_errors
async def delete_vaccine(
    record_id: int,
    tenant: TenantContext = Depends(get_tenant),
    record_service: RecordService = Depends(get_record_service),
) -> DeleteResponse:
    """
    Delete a vaccine.

    Raises:
        HTTPException(404): Record not found for this tenant
    """
    removed = await record_service.delete_record(tenant, "vaccines", record_id)
    return DeleteResponse(success=True, firebase_id=removed.firebase_id)


@router.patch("/{record_id}/firebase-id", response_model=SuccessResponse)
@handle_record_errors
async def set_vaccine_remote_id(
    record_id: int,
    request: RemoteIdRequest,
    tenant: TenantContext = Depends(get_tenant),
    record_service: RecordService = Depends(get_record_service),
) -> SuccessResponse:
    """Record the remote document id of a vaccine."""
    await record_service.set_remote_id(tenant, "vaccines", record_id, request.firebase_id)
    return SuccessResponse()
