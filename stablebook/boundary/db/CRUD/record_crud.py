"""
CRUD operations for horse-dependent records.

Visits, vaccines and pregnancies all hang off a horse and are
create/delete only. Adds per-horse listing and bulk removal used by the
horse cascade.

Dependencies: sqlalchemy, stablebook.boundary.db.models
System role: Visit, vaccine and pregnancy persistence operations
"""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from stablebook.boundary.db.CRUD.base_crud import BaseCRUD, ModelT
from stablebook.boundary.db.models import PregnancyModel, VaccineModel, VisitModel


class HorseRecordCRUD(BaseCRUD[ModelT]):
    """CRUD for records that reference a horse through ``horse_id``."""

    async def list_for_horse(self, session: AsyncSession, horse_id: int) -> Sequence[ModelT]:
        """
        Retrieve all records of one horse in default order.

        Args:
            session: Async database session
            horse_id: Local horse identifier

        Returns:
            Sequence of model instances
        """
        stmt = select(self.model).where(self.model.horse_id == horse_id).order_by(*self.ordering)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_for_horse(self, session: AsyncSession, horse_id: int) -> Sequence[ModelT]:
        """
        Remove all records of one horse.

        Args:
            session: Async database session
            horse_id: Local horse identifier

        Returns:
            The removed records, loaded before deletion so their remote ids
            remain available to the caller
        """
        removed = await self.list_for_horse(session, horse_id)
        await session.execute(delete(self.model).where(self.model.horse_id == horse_id))
        return removed


visit_crud = HorseRecordCRUD(VisitModel, ordering=(VisitModel.date.desc(), VisitModel.id.desc()))
vaccine_crud = HorseRecordCRUD(VaccineModel, ordering=(VaccineModel.date.desc(), VaccineModel.id.desc()))
pregnancy_crud = HorseRecordCRUD(PregnancyModel)
