"""
Insight service.

Read-only views over a tenant's records: due/overdue reminders, a single
horse's timeline and the stable statistics dashboard.

Dependencies: stablebook.boundary.db.CRUD, stablebook.core
System role: Reminder and dashboard orchestration
"""

import logging
from datetime import date
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from stablebook.boundary.db.CRUD import horse_crud, pregnancy_crud, vaccine_crud, visit_crud
from stablebook.core.exceptions import RecordNotFoundError
from stablebook.core.insights import TimelineEvent, build_timeline, compute_stable_stats
from stablebook.core.reminders import Reminder, derive_reminders
from stablebook.core.tenant import TenantContext

logger = logging.getLogger(__name__)


class InsightService:
    """Reminders, timelines and statistics."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _visible_horses(self, tenant: TenantContext):
        if tenant.is_admin:
            return await horse_crud.list_all(self.db)
        return await horse_crud.list_for_tenant(self.db, tenant.user_id)

    async def reminders(self, tenant: TenantContext, today: date | None = None) -> list[Reminder]:
        """
        Derive the tenant's reminders.

        Args:
            tenant: Caller context
            today: Reference day (defaults to the server's local date)

        Returns:
            list[Reminder]: Ordered alerts
        """
        today = today or date.today()
        reminders = derive_reminders(
            vaccines=await vaccine_crud.list_for_tenant(self.db, tenant.user_id),
            pregnancies=await pregnancy_crud.list_for_tenant(self.db, tenant.user_id),
            horses=await self._visible_horses(tenant),
            today=today,
        )
        logger.debug("Derived reminders", extra={"user_id": tenant.user_id, "count": len(reminders)})
        return reminders

    async def timeline(self, tenant: TenantContext, horse_id: int) -> list[TimelineEvent]:
        """
        Events of one horse, newest first.

        Raises:
            RecordNotFoundError: If the horse is not visible to the caller
        """
        if tenant.is_admin:
            horse = await horse_crud.get_any(self.db, horse_id)
        else:
            horse = await horse_crud.get(self.db, horse_id, tenant.user_id)
        if horse is None:
            raise RecordNotFoundError("horse", horse_id)
        return build_timeline(
            visits=await visit_crud.list_for_horse(self.db, horse_id),
            vaccines=await vaccine_crud.list_for_horse(self.db, horse_id),
            pregnancies=await pregnancy_crud.list_for_horse(self.db, horse_id),
        )

    async def stats(self, tenant: TenantContext) -> dict[str, Any]:
        """Gender split, age groups and record totals for the caller."""
        visits = await visit_crud.list_for_tenant(self.db, tenant.user_id)
        vaccines = await vaccine_crud.list_for_tenant(self.db, tenant.user_id)
        pregnancies = await pregnancy_crud.list_for_tenant(self.db, tenant.user_id)
        return compute_stable_stats(
            await self._visible_horses(tenant),
            visit_count=len(visits),
            vaccine_count=len(vaccines),
            pregnancy_count=len(pregnancies),
        )
