"""
Observability module.

Provides logging configuration, correlation ID tracking, request logging
middleware and Langfuse prompt version management.
"""

from stablebook.observability.logger import configure_logging, get_logger
from stablebook.observability.prompt_registry import PromptRegistry

__all__ = ["PromptRegistry", "configure_logging", "get_logger"]
