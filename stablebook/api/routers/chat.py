"""
Chat API endpoints.

Routes: POST /chat

Dependencies: stablebook.application.services, stablebook.models
System role: Stable assistant HTTP API
"""

from fastapi import APIRouter, Depends

from stablebook.api.deps.dependencies import get_chat_service, get_tenant
from stablebook.api.routers.router_utils import handle_record_errors
from stablebook.application.services import ChatService
from stablebook.core.tenant import TenantContext
from stablebook.models.chat import ChatRequest, ChatResponse

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
@handle_record_errors
async def chat(
    request: ChatRequest,
    tenant: TenantContext = Depends(get_tenant),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Ask the stable assistant a question.

    Raises:
        HTTPException(500): Gemini API key not configured, or generation failed
    """
    reply = await chat_service.reply(tenant, request.message)
    return ChatResponse(reply=reply)
