"""
CRUD operations for database models.

Exports base CRUD classes and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from stablebook.boundary.db.CRUD import horse_crud, visit_crud

    horses = await horse_crud.list_for_tenant(db, tenant_id)
    result = await horse_crud.delete_cascade(db, horse_id, tenant_id)
"""

from stablebook.boundary.db.CRUD.base_crud import BaseCRUD
from stablebook.boundary.db.CRUD.record_crud import (
    HorseRecordCRUD,
    pregnancy_crud,
    vaccine_crud,
    visit_crud,
)
from stablebook.boundary.db.CRUD.horse_crud import CascadeDeleteResult, HorseCRUD, horse_crud

__all__ = [
    "BaseCRUD",
    "HorseRecordCRUD",
    "HorseCRUD",
    "CascadeDeleteResult",
    "horse_crud",
    "visit_crud",
    "vaccine_crud",
    "pregnancy_crud",
]
