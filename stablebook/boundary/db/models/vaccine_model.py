"""
Vaccination ORM model.

Dependencies: sqlalchemy, stablebook.boundary.db.base
System role: Vaccine persistence
"""

import datetime as dt

from sqlalchemy import Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stablebook.boundary.db.base import Base, TenantRecordMixin, TimestampMixin


class VaccineModel(Base, TenantRecordMixin, TimestampMixin):
    """
    Vaccination given to a horse.

    Attributes:
        horse_id: Owning horse (local id)
        type: Vaccine name/type
        date: Date administered
        next_date: Next due date, optional; drives reminders
        notes: Free-text notes, optional
    """

    __tablename__ = "vaccines"

    horse_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("horses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    next_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True, default=None)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    horse = relationship("HorseModel", back_populates="vaccines")
