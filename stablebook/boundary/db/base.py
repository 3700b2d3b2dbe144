"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models and reusable mixins for the fields
every stable record carries (local id, tenant, remote id, created time).

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    pass


class TenantRecordMixin:
    """
    Mixin providing the identity columns shared by all stable records.

    Attributes:
        id: Autoincrement integer primary key (local identifier)
        user_id: Owning tenant identifier
        firebase_id: Identifier of the mirrored document in the legacy
            document store, null until mirroring succeeds
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        index=True,
    )
    firebase_id: Mapped[str | None] = mapped_column(
        String(128),
        nullable=True,
        default=None,
    )


class TimestampMixin:
    """
    Mixin providing creation timestamp.

    Records other than horses are never updated, so only created_at is kept.

    Attributes:
        created_at: Row creation timestamp (UTC, immutable)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
