"""
Application services.

Use case orchestrators sitting between the API routers and the boundary
layer. Services own the session transaction: CRUD methods flush, services
commit.
"""

from stablebook.application.services.chat_service import ChatService
from stablebook.application.services.horse_service import HorseService
from stablebook.application.services.insight_service import InsightService
from stablebook.application.services.migration_service import MigrationService
from stablebook.application.services.record_service import RecordService
from stablebook.application.services.sync_service import RemoteSync

__all__ = [
    "ChatService",
    "HorseService",
    "InsightService",
    "MigrationService",
    "RecordService",
    "RemoteSync",
]
