"""
Auth API endpoints.

Routes: GET /auth/check-admin

Dependencies: stablebook.api.deps
System role: Admin allow-list lookup
"""

from fastapi import APIRouter, Depends

from stablebook.api.deps.dependencies import get_tenant
from stablebook.core.tenant import TenantContext
from stablebook.models.insights import AdminCheckResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/check-admin", response_model=AdminCheckResponse)
async def check_admin(tenant: TenantContext = Depends(get_tenant)) -> AdminCheckResponse:
    """Whether the caller's email is on the admin allow-list."""
    return AdminCheckResponse(is_admin=tenant.is_admin)
