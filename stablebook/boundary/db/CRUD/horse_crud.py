"""
Horse CRUD operations.

Extends BaseCRUD with horse editing, tenant counts and the cascade delete
that removes every visit, vaccine and pregnancy of the horse in the same
transaction.

Dependencies: sqlalchemy, stablebook.boundary.db.models
System role: Horse persistence operations
"""

from dataclasses import dataclass, field
from typing import Any, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from stablebook.boundary.db.CRUD.base_crud import BaseCRUD
from stablebook.boundary.db.CRUD.record_crud import pregnancy_crud, vaccine_crud, visit_crud
from stablebook.boundary.db.models import HorseModel, PregnancyModel, VaccineModel, VisitModel


@dataclass
class CascadeDeleteResult:
    """Horse removed by a cascade delete together with its dependents."""

    horse: HorseModel
    visits: Sequence[VisitModel] = field(default_factory=list)
    vaccines: Sequence[VaccineModel] = field(default_factory=list)
    pregnancies: Sequence[PregnancyModel] = field(default_factory=list)

    @property
    def removed_count(self) -> int:
        """Total rows removed, the horse included."""
        return 1 + len(self.visits) + len(self.vaccines) + len(self.pregnancies)

    def remote_ids(self) -> dict[str, list[str]]:
        """Remote ids of the removed dependents, by collection."""
        return {
            "visits": [v.firebase_id for v in self.visits if v.firebase_id],
            "vaccines": [v.firebase_id for v in self.vaccines if v.firebase_id],
            "pregnancies": [p.firebase_id for p in self.pregnancies if p.firebase_id],
        }


class HorseCRUD(BaseCRUD[HorseModel]):
    """CRUD operations for HorseModel."""

    def __init__(self) -> None:
        """Initialize HorseCRUD with HorseModel."""
        super().__init__(HorseModel)

    async def update(
        self,
        session: AsyncSession,
        id: int,
        user_id: str,
        **fields: Any,
    ) -> HorseModel | None:
        """
        Update a tenant's horse.

        Args:
            session: Async database session
            id: Local horse identifier
            user_id: Tenant identifier
            **fields: Fields to update with new values

        Returns:
            Updated horse if found, None otherwise
        """
        horse = await self.get(session, id, user_id)
        if horse is None:
            return None
        for name, value in fields.items():
            setattr(horse, name, value)
        await session.flush()
        return horse

    async def count_for_tenant(self, session: AsyncSession, user_id: str) -> int:
        """Number of horses a tenant owns locally."""
        stmt = select(func.count()).select_from(HorseModel).where(HorseModel.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def delete_cascade(
        self,
        session: AsyncSession,
        id: int,
        user_id: str,
    ) -> CascadeDeleteResult | None:
        """
        Delete a tenant's horse and all records referencing it.

        Args:
            session: Async database session
            id: Local horse identifier
            user_id: Tenant identifier

        Returns:
            CascadeDeleteResult, None if the horse is not owned by the tenant
        """
        horse = await self.get(session, id, user_id)
        if horse is None:
            return None
        return await self._cascade(session, horse)

    async def delete_any(self, session: AsyncSession, id: int) -> CascadeDeleteResult | None:
        """Delete any tenant's horse with its dependents (admin)."""
        horse = await self.get_any(session, id)
        if horse is None:
            return None
        return await self._cascade(session, horse)

    async def _cascade(self, session: AsyncSession, horse: HorseModel) -> CascadeDeleteResult:
        result = CascadeDeleteResult(
            horse=horse,
            visits=await visit_crud.delete_for_horse(session, horse.id),
            vaccines=await vaccine_crud.delete_for_horse(session, horse.id),
            pregnancies=await pregnancy_crud.delete_for_horse(session, horse.id),
        )
        await session.execute(delete(HorseModel).where(HorseModel.id == horse.id))
        await session.flush()
        return result


horse_crud = HorseCRUD()
