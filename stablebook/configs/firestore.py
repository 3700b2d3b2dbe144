"""
Firestore configuration settings.

Connection settings for the legacy document store that the stable data is
migrated from and mirrored back to.

Dependencies: pydantic_settings
System role: Remote document store configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FirestoreSettings(BaseSettings):
    """Legacy Firestore project configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FIRESTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(
        default=False,
        description="Enable migration from and mirroring to Firestore",
    )
    project_id: str | None = Field(
        default=None,
        description="Google Cloud project id (falls back to ambient credentials)",
    )
    credentials_file: str | None = Field(
        default=None,
        description="Path to a service account JSON file",
    )
