"""
Insight API endpoints.

Routes:
- GET /reminders - Due and overdue vaccines and foalings
- GET /stats - Stable statistics dashboard

Dependencies: stablebook.application.services, stablebook.models
System role: Read-only insight HTTP API
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from stablebook.api.deps.dependencies import get_insight_service, get_tenant
from stablebook.api.routers.router_utils import handle_record_errors
from stablebook.application.services import InsightService
from stablebook.core.tenant import TenantContext
from stablebook.models.insights import ReminderResponse, StableStatsResponse

router = APIRouter(tags=["insights"])


@router.get("/reminders", response_model=list[ReminderResponse])
@handle_record_errors
async def list_reminders(
    today: date | None = Query(None, description="Reference day (YYYY-MM-DD), defaults to server date"),
    tenant: TenantContext = Depends(get_tenant),
    insight_service: InsightService = Depends(get_insight_service),
) -> list[ReminderResponse]:
    """Alerts ordered overdue first, then due today/soon, then upcoming."""
    reminders = await insight_service.reminders(tenant, today)
    return [ReminderResponse.model_validate(reminder) for reminder in reminders]


@router.get("/stats", response_model=StableStatsResponse)
@handle_record_errors
async def stable_stats(
    tenant: TenantContext = Depends(get_tenant),
    insight_service: InsightService = Depends(get_insight_service),
) -> StableStatsResponse:
    """Gender split, age groups and record totals."""
    return StableStatsResponse(**await insight_service.stats(tenant))
