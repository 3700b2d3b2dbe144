"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from stablebook.configs.assistant import AssistantSettings
from stablebook.configs.auth import AuthSettings
from stablebook.configs.base import BaseSettings
from stablebook.configs.database import DatabaseSettings
from stablebook.configs.firestore import FirestoreSettings
from stablebook.configs.observability import ObservabilitySettings
from stablebook.configs.storage import StorageSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    firestore: FirestoreSettings = Field(default_factory=FirestoreSettings)
    assistant: AssistantSettings = Field(default_factory=AssistantSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from stablebook.configs import get_settings
        settings = get_settings()
        admins = settings.auth.admin_email_set
    """
    return Settings()
