"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, TenantRecordMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(), init_db()
  - HorseModel, VisitModel, VaccineModel, PregnancyModel and their enums
  - horse_crud, visit_crud, vaccine_crud, pregnancy_crud: CRUD singletons

Dependencies: sqlalchemy, stablebook.configs
System role: Local relational store adapter for stable records
"""

from stablebook.boundary.db.base import Base, TenantRecordMixin, TimestampMixin
from stablebook.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
    init_db,
)
from stablebook.boundary.db.models import (
    Gender,
    HorseModel,
    PregnancyModel,
    PregnancyStatus,
    VaccineModel,
    VisitModel,
    VisitType,
)
from stablebook.boundary.db.CRUD import (
    BaseCRUD,
    CascadeDeleteResult,
    HorseCRUD,
    HorseRecordCRUD,
    horse_crud,
    pregnancy_crud,
    vaccine_crud,
    visit_crud,
)

__all__ = [
    "Base",
    "TenantRecordMixin",
    "TimestampMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "init_db",
    "Gender",
    "HorseModel",
    "PregnancyModel",
    "PregnancyStatus",
    "VaccineModel",
    "VisitModel",
    "VisitType",
    "BaseCRUD",
    "CascadeDeleteResult",
    "HorseCRUD",
    "HorseRecordCRUD",
    "horse_crud",
    "pregnancy_crud",
    "vaccine_crud",
    "visit_crud",
]
