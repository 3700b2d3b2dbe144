"""
Chat service orchestrator.

Gathers the caller's stable records and asks the assistant. Admins see
every tenant's horses in the context; visits, vaccines and pregnancies
are always the caller's own.

Dependencies: stablebook.boundary.db.CRUD, stablebook.core.assistant
System role: Chat use case orchestration
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from stablebook.boundary.db.CRUD import horse_crud, pregnancy_crud, vaccine_crud, visit_crud
from stablebook.core.assistant import StableAssistant
from stablebook.core.exceptions import AssistantUnavailableError
from stablebook.core.tenant import TenantContext

logger = logging.getLogger(__name__)


class ChatService:
    """Chat service orchestrator."""

    def __init__(self, db: AsyncSession, assistant: StableAssistant) -> None:
        """
        Initialize chat service.

        Args:
            db: Async SQLAlchemy session
            assistant: Gemini-backed stable assistant
        """
        self.db = db
        self.assistant = assistant

    async def reply(self, tenant: TenantContext, message: str) -> str:
        """
        Answer a question about the caller's stable.

        Args:
            tenant: Caller context
            message: User's question

        Returns:
            str: Assistant reply

        Raises:
            AssistantUnavailableError: If no API key is configured or generation fails
        """
        if not self.assistant.is_configured:
            logger.error("Gemini API key is missing")
            raise AssistantUnavailableError("Gemini API key not configured")

        if tenant.is_admin:
            horses = await horse_crud.list_all(self.db)
        else:
            horses = await horse_crud.list_for_tenant(self.db, tenant.user_id)
        visits = await visit_crud.list_for_tenant(self.db, tenant.user_id)
        vaccines = await vaccine_crud.list_for_tenant(self.db, tenant.user_id)
        pregnancies = await pregnancy_crud.list_for_tenant(self.db, tenant.user_id)

        try:
            reply = await self.assistant.reply(message, horses, visits, vaccines, pregnancies)
        except AssistantUnavailableError:
            raise
        except Exception as e:
            logger.error("Chat generation failed", extra={"user_id": tenant.user_id, "error": str(e)})
            raise AssistantUnavailableError("Failed to generate response", {"error": str(e)}) from e

        logger.info("Chat reply generated", extra={"user_id": tenant.user_id, "reply_length": len(reply)})
        return reply
