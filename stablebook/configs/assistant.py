"""
Stable assistant configuration.

Gemini model parameters for the chat assistant.

Dependencies: pydantic_settings
System role: LLM configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AssistantSettings(BaseSettings):
    """Gemini chat model configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Gemini API key")
    model: str = Field(default="gemini-2.5-flash", description="Gemini model name")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
    recent_visits: int = Field(
        default=10,
        description="Number of most recent visits included in the assistant context",
    )
