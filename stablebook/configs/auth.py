"""
Tenant authentication configuration.

Holds the admin allow-list. Admins see every tenant's horses and may
delete any horse.

Dependencies: pydantic_settings
System role: Authorization configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Admin allow-list configuration."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    admin_emails: str = Field(
        default="",
        description="Comma-separated admin email addresses",
    )

    @property
    def admin_email_set(self) -> frozenset[str]:
        """Normalized admin emails."""
        return frozenset(
            email.strip().lower()
            for email in self.admin_emails.split(",")
            if email.strip()
        )
