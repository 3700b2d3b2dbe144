"""
Veterinary visit ORM model.

Dependencies: sqlalchemy, stablebook.boundary.db.base
System role: Visit persistence
"""

import enum
import datetime as dt

from sqlalchemy import Date, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stablebook.boundary.db.base import Base, TenantRecordMixin, TimestampMixin


class VisitType(str, enum.Enum):
    """Kind of veterinary visit."""

    ROUTINE = "routine"
    TREATMENT = "treatment"
    EMERGENCY = "emergency"
    SURGERY = "surgery"


class VisitModel(Base, TenantRecordMixin, TimestampMixin):
    """
    Veterinary visit for a horse.

    Attributes:
        horse_id: Owning horse (local id)
        date: Visit date
        vet_name: Veterinarian name
        type: Visit type
        notes: Free-text notes, optional
    """

    __tablename__ = "visits"

    horse_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("horses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    vet_name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[VisitType] = mapped_column(
        Enum(VisitType, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    horse = relationship("HorseModel", back_populates="visits")
