"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_chat_service,
    get_horse_service,
    get_insight_service,
    get_migration_service,
    get_record_service,
    get_remote_sync,
    get_service_cache,
    get_tenant,
)

__all__ = [
    "get_chat_service",
    "get_horse_service",
    "get_insight_service",
    "get_migration_service",
    "get_record_service",
    "get_remote_sync",
    "get_service_cache",
    "get_tenant",
]
