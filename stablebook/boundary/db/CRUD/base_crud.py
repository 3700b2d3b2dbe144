"""
Base CRUD operations for tenant-scoped stable records.

Provides generic Create, Read, Delete operations scoped by tenant, plus the
admin variants that bypass scoping and the remote id setter used by the
dual-write synchronizer. Model-specific classes extend these.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from stablebook.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for tenant-scoped CRUD operations.

    Methods flush but never commit; the calling service owns the transaction.

    Type Parameters:
        ModelT: SQLAlchemy model class with TenantRecordMixin columns

    Attributes:
        model: The SQLAlchemy model class to operate on
        ordering: ORDER BY clauses used by list operations
    """

    def __init__(self, model: type[ModelT], ordering: Sequence[ColumnElement] = ()) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
            ordering: Default list ordering (newest first when empty)
        """
        self.model = model
        self.ordering = tuple(ordering) or (model.created_at.desc(), model.id.desc())

    async def create(self, session: AsyncSession, user_id: str, **fields: Any) -> ModelT:
        """
        Create a new record owned by a tenant.

        Args:
            session: Async database session
            user_id: Owning tenant identifier
            **fields: Model field values

        Returns:
            Created model instance with generated id and timestamp
        """
        instance = self.model(user_id=user_id, **fields)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get(self, session: AsyncSession, id: int, user_id: str) -> ModelT | None:
        """
        Retrieve a record by id if it belongs to the tenant.

        Args:
            session: Async database session
            id: Local identifier
            user_id: Tenant identifier

        Returns:
            Model instance if found and owned, None otherwise
        """
        stmt = select(self.model).where(self.model.id == id, self.model.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_any(self, session: AsyncSession, id: int) -> ModelT | None:
        """Retrieve a record by id regardless of tenant (admin)."""
        stmt = select(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_tenant(self, session: AsyncSession, user_id: str) -> Sequence[ModelT]:
        """
        Retrieve all records of a tenant in default order.

        Args:
            session: Async database session
            user_id: Tenant identifier

        Returns:
            Sequence of model instances
        """
        stmt = select(self.model).where(self.model.user_id == user_id).order_by(*self.ordering)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_all(self, session: AsyncSession) -> Sequence[ModelT]:
        """Retrieve every tenant's records in default order (admin)."""
        stmt = select(self.model).order_by(*self.ordering)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete(self, session: AsyncSession, id: int, user_id: str) -> ModelT | None:
        """
        Delete a tenant's record.

        Args:
            session: Async database session
            id: Local identifier
            user_id: Tenant identifier

        Returns:
            The removed record (carrying its remote id), None if not found
        """
        instance = await self.get(session, id, user_id)
        if instance is None:
            return None
        await session.execute(delete(self.model).where(self.model.id == id))
        return instance

    async def set_remote_id(self, session: AsyncSession, id: int, firebase_id: str) -> bool:
        """
        Record the remote document id on a local row.

        Args:
            session: Async database session
            id: Local identifier
            firebase_id: Remote document identifier

        Returns:
            True if a row was updated, False if not found
        """
        stmt = update(self.model).where(self.model.id == id).values(firebase_id=firebase_id)
        result = await session.execute(stmt)
        return result.rowcount > 0
