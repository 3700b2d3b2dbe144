"""
Image storage configuration.

Settings for where horse photos and pedigree certificates are written.
The local backend writes into a directory served under /uploads; the s3
backend writes into a bucket.

Dependencies: pydantic_settings
System role: Image storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Settings for uploaded image storage."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="local",
        description="Storage backend: 'local' or 's3'",
    )
    uploads_dir: str = Field(
        default="uploads",
        description="Directory for locally stored images",
    )
    url_prefix: str = Field(
        default="/uploads",
        description="Path prefix under which stored images are served",
    )
    bucket: str = Field(
        default="stablebook-dev-uploads",
        description="S3 bucket for image storage (s3 backend)",
    )
    region: str = Field(
        default="eu-central-1",
        description="AWS region for S3 bucket",
    )
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum accepted image size in bytes",
    )
