"""
Database models package.

Exports:
  - HorseModel, Gender: Horse ORM model and gender enum
  - VisitModel, VisitType: Visit ORM model and visit type enum
  - VaccineModel: Vaccine ORM model
  - PregnancyModel, PregnancyStatus: Pregnancy ORM model and status enum

Dependencies: sqlalchemy, stablebook.boundary.db.base
System role: Database model definitions for stable records
"""

from stablebook.boundary.db.models.horse_model import Gender, HorseModel
from stablebook.boundary.db.models.visit_model import VisitModel, VisitType
from stablebook.boundary.db.models.vaccine_model import VaccineModel
from stablebook.boundary.db.models.pregnancy_model import PregnancyModel, PregnancyStatus

__all__ = [
    "Gender",
    "HorseModel",
    "VisitModel",
    "VisitType",
    "VaccineModel",
    "PregnancyModel",
    "PregnancyStatus",
]
