"""
Chat schemas.

Dependencies: pydantic
System role: Assistant API contracts
"""

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    message: str = Field(..., min_length=1, max_length=4000, description="User question")


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    reply: str
