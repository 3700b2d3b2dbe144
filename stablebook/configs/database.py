"""
Database configuration settings.

Manages the relational store connection for SQLAlchemy. Defaults to a
SQLite file next to the working directory; any async SQLAlchemy URL
(e.g. postgresql+asyncpg://) is accepted.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from stablebook.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Relational store configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DATABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="sqlite+aiosqlite:///./data.db",
        description="Async SQLAlchemy database URL",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    pool_size: int = Field(default=10, description="Connection pool size (server databases only)")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured URL points at SQLite."""
        return self.url.startswith("sqlite")
