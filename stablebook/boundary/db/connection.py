"""
Database connection management.

Provides async SQLAlchemy engine, session factory, FastAPI dependency for
session injection, and schema initialization.

Dependencies: sqlalchemy, stablebook.configs
System role: Database connection lifecycle management
"""

import logging
from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy import event, inspect, text
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from stablebook.boundary.db.base import Base
from stablebook.configs import get_settings

logger = logging.getLogger(__name__)

# Columns added to the horses table after the first release
LEGACY_HORSE_COLUMNS = {
    "father_name": "VARCHAR(255)",
    "mother_name": "VARCHAR(255)",
    "cert_image": "VARCHAR(512)",
}


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    SQLite files get foreign key enforcement and WAL journaling; server
    databases get a pre-pinged connection pool.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Raises:
        ArgumentError: If database URL is invalid or engine creation fails
    """
    db_config = get_settings().database

    if db_config.is_sqlite:
        engine = create_async_engine(db_config.url, echo=db_config.echo_sql)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        db_config.url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Returns async_sessionmaker bound to the engine with autoflush=False for
    explicit transaction control and expire_on_commit=False so records stay
    readable after commit.

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)

    Usage:
        @router.get("/horses")
        async def list_horses(db: AsyncSession = Depends(get_async_db)):
            return await horse_crud.list_for_tenant(db, tenant_id)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session


def ensure_legacy_columns(connection: Connection) -> list[str]:
    """
    Add horse columns missing from a table created by an older release.

    Args:
        connection: Synchronous connection (run through ``run_sync``)

    Returns:
        list[str]: Names of the columns that were added
    """
    existing = {column["name"] for column in inspect(connection).get_columns("horses")}
    added = []
    for name, ddl_type in LEGACY_HORSE_COLUMNS.items():
        if name not in existing:
            connection.execute(text(f"ALTER TABLE horses ADD COLUMN {name} {ddl_type}"))
            added.append(name)
    return added


async def init_db(engine: AsyncEngine | None = None) -> None:
    """
    Create missing tables and columns.

    Args:
        engine: Engine to initialize (defaults to the configured engine)
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        added = await conn.run_sync(ensure_legacy_columns)
    if added:
        logger.info("Added legacy horse columns", extra={"columns": added})
    logger.info("Database schema ready")
