"""
Horse API endpoints.

Routes:
- GET /horses - List horses (admin: every tenant's; empty list triggers migration)
- POST /horses - Create horse (multipart form with optional images)
- PUT /horses/{id} - Edit horse (multipart form; replaced images are deleted)
- DELETE /horses/{id} - Delete horse with its visits, vaccines and pregnancies
- GET /horses/{id}/timeline - Events of one horse, newest first
- PATCH /horses/{id}/firebase-id - Record the remote document id

Dependencies: stablebook.application.services, stablebook.models
System role: Horse management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from stablebook.api.deps.dependencies import get_horse_service, get_insight_service, get_tenant
from stablebook.api.routers.router_utils import handle_record_errors
from stablebook.application.services import HorseService, InsightService
from stablebook.boundary.db.models import Gender
from stablebook.configs import get_settings
from stablebook.core.tenant import TenantContext
from stablebook.models.common import DeleteResponse, RemoteIdRequest, SuccessResponse
from stablebook.models.horse import HorseFormData, HorseResponse
from stablebook.models.insights import TimelineEventResponse

from .horse_responses import map_cascade_to_response, map_horse_to_response, map_horses_to_response
from .horse_validators import read_image_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/horses", tags=["horses"])


@router.get("", response_model=list[HorseResponse])
@handle_record_errors
async def list_horses(
    tenant: TenantContext = Depends(get_tenant),
    horse_service: HorseService = Depends(get_horse_service),
) -> list[HorseResponse]:
    """
    List horses visible to the caller.

    Returns:
        list[HorseResponse]: Horses, newest first
    """
    horses = await horse_service.list_horses(tenant)
    return map_horses_to_response(horses)


@router.post("", response_model=HorseResponse, status_code=201)
@handle_record_errors
async def create_horse(
    name: str = Form(...),
    age: int = Form(...),
    breed: str = Form(""),
    gender: Gender = Form(...),
    father_name: str | None = Form(None, alias="fatherName"),
    mother_name: str | None = Form(None, alias="motherName"),
    image: UploadFile | None = File(None),
    cert_image: UploadFile | None = File(None, alias="certImage"),
    tenant: TenantContext = Depends(get_tenant),
    horse_service: HorseService = Depends(get_horse_service),
) -> HorseResponse:
    """
    Create a horse.

    Returns:
        HorseResponse: Created horse

    Raises:
        HTTPException(400): Upload is not an image or is too large
        HTTPException(422): Invalid form fields
    """
    form = HorseFormData(
        name=name,
        age=age,
        breed=breed,
        gender=gender,
        father_name=father_name or None,
        mother_name=mother_name or None,
    )
    max_bytes = get_settings().storage.max_upload_bytes
    photo = await read_image_upload(image, "image", max_bytes)
    certificate = await read_image_upload(cert_image, "certImage", max_bytes)

    logger.info("Creating horse", extra={"user_id": tenant.user_id, "has_image": photo is not None})
    horse = await horse_service.create_horse(tenant, form, photo, certificate)
    return map_horse_to_response(horse)


@router.put("/{horse_id}", response_model=HorseResponse)
@handle_record_errors
async def update_horse(
    horse_id: int,
    name: str = Form(...),
    age: int = Form(...),
    breed: str = Form(""),
    gender: Gender = Form(...),
    father_name: str | None = Form(None, alias="fatherName"),
    mother_name: str | None = Form(None, alias="motherName"),
    image: UploadFile | None = File(None),
    cert_image: UploadFile | None = File(None, alias="certImage"),
    tenant: TenantContext = Depends(get_tenant),
    horse_service: HorseService = Depends(get_horse_service),
) -> HorseResponse:
    """
    Edit a horse; uploading a new image replaces and deletes the old one.

    Raises:
        HTTPException(404): Horse not found for this tenant
    """
    form = HorseFormData(
        name=name,
        age=age,
        breed=breed,
        gender=gender,
        father_name=father_name or None,
        mother_name=mother_name or None,
    )
    max_bytes = get_settings().storage.max_upload_bytes
    photo = await read_image_upload(image, "image", max_bytes)
    certificate = await read_image_upload(cert_image, "certImage", max_bytes)

    horse = await horse_service.update_horse(tenant, horse_id, form, photo, certificate)
    return map_horse_to_response(horse)


@router.delete("/{horse_id}", response_model=DeleteResponse, response_model_exclude_unset=True)
@handle_record_errors
async def delete_horse(
    horse_id: int,
    tenant: TenantContext = Depends(get_tenant),
    horse_service: HorseService = Depends(get_horse_service),
) -> DeleteResponse:
    """
    Delete a horse and everything recorded for it.

    Returns:
        DeleteResponse: Remote id of the horse; admins also get the remote
        ids of every removed visit, vaccine and pregnancy

    Raises:
        HTTPException(404): Horse not found (or not owned, for tenants)
    """
    result = await horse_service.delete_horse(tenant, horse_id)
    return map_cascade_to_response(result, include_related=tenant.is_admin)


@router.get("/{horse_id}/timeline", response_model=list[TimelineEventResponse])
@handle_record_errors
async def horse_timeline(
    horse_id: int,
    tenant: TenantContext = Depends(get_tenant),
    insight_service: InsightService = Depends(get_insight_service),
) -> list[TimelineEventResponse]:
    """Visits, vaccines, matings and expected foalings of one horse."""
    events = await insight_service.timeline(tenant, horse_id)
    return [TimelineEventResponse.model_validate(event) for event in events]


@router.patch("/{horse_id}/firebase-id", response_model=SuccessResponse)
@handle_record_errors
async def set_horse_remote_id(
    horse_id: int,
    request: RemoteIdRequest,
    tenant: TenantContext = Depends(get_tenant),
    horse_service: HorseService = Depends(get_horse_service),
) -> SuccessResponse:
    """Record the remote document id of a horse."""
    await horse_service.set_remote_id(tenant, horse_id, request.firebase_id)
    return SuccessResponse()
