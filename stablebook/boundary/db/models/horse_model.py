"""
Horse ORM model.

Represents a horse owned by a tenant, with optional photo, pedigree names
and pedigree certificate image.

Dependencies: sqlalchemy, stablebook.boundary.db.base
System role: Horse persistence
"""

import enum

from sqlalchemy import Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stablebook.boundary.db.base import Base, TenantRecordMixin, TimestampMixin


class Gender(str, enum.Enum):
    """Horse gender."""

    MALE = "male"
    FEMALE = "female"


class HorseModel(Base, TenantRecordMixin, TimestampMixin):
    """
    Horse ORM model.

    Attributes:
        name: Horse name
        age: Age in years (>= 0)
        breed: Breed name
        gender: male or female
        image: Stored image reference (file name), optional
        father_name: Sire name, optional
        mother_name: Dam name, optional
        cert_image: Stored pedigree certificate reference, optional

    Relationships:
        visits, vaccines, pregnancies: dependents removed with the horse
    """

    __tablename__ = "horses"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    breed: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[Gender] = mapped_column(
        Enum(Gender, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    image: Mapped[str | None] = mapped_column(String(512), nullable=True, default=None)
    father_name: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    mother_name: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    cert_image: Mapped[str | None] = mapped_column(String(512), nullable=True, default=None)

    visits = relationship("VisitModel", back_populates="horse", passive_deletes=True)
    vaccines = relationship("VaccineModel", back_populates="horse", passive_deletes=True)
    pregnancies = relationship("PregnancyModel", back_populates="horse", passive_deletes=True)
