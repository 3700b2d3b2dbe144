"""
Pregnancy ORM model.

Dependencies: sqlalchemy, stablebook.boundary.db.base
System role: Pregnancy persistence
"""

import enum
import datetime as dt

from sqlalchemy import Date, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stablebook.boundary.db.base import Base, TenantRecordMixin, TimestampMixin


class PregnancyStatus(str, enum.Enum):
    """Pregnancy tracking status."""

    CONFIRMED = "confirmed"
    PENDING = "pending"
    ENDED = "ended"


class PregnancyModel(Base, TenantRecordMixin, TimestampMixin):
    """
    Pregnancy of a mare.

    Attributes:
        horse_id: The mare (local id)
        mating_date: Date of mating
        stallion_name: Sire of the foal
        status: confirmed, pending or ended
        expected_date: Expected foaling date (mating date + 340 days)
    """

    __tablename__ = "pregnancies"

    horse_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("horses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    mating_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    stallion_name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[PregnancyStatus] = mapped_column(
        Enum(PregnancyStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    expected_date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    horse = relationship("HorseModel", back_populates="pregnancies")
