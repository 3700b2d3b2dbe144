"""Gemini chat assistant over stable records."""

from stablebook.core.assistant.stable_assistant import StableAssistant, build_context
from stablebook.core.assistant.stable_assistant_prompt import (
    STABLE_ASSISTANT_PROMPT,
    STABLE_PROMPT_NAME,
    get_stable_prompt,
    register_stable_prompt,
)

__all__ = [
    "STABLE_ASSISTANT_PROMPT",
    "STABLE_PROMPT_NAME",
    "StableAssistant",
    "build_context",
    "get_stable_prompt",
    "register_stable_prompt",
]
