"""
Langfuse prompt registry for versioned prompt management.

Singleton registry that versions the assistant's LangChain chat template in
Langfuse and fetches a labelled version back. Inactive when Langfuse keys
are not configured; callers then fall back to the in-code template.

Dependencies: langfuse, langchain_core, stablebook.configs
System role: Prompt version control and retrieval
"""

import logging
import re
from typing import Any

from langchain_core.prompts import ChatPromptTemplate
from langfuse import Langfuse

from stablebook.configs import get_settings

logger = logging.getLogger(__name__)

_ROLE_MAP = {"system": "system", "human": "user", "ai": "assistant"}


def _convert_variables(content: str) -> str:
    """LangChain uses {variable} while Langfuse uses {{variable}}."""
    return re.sub(r"(?<!\{)\{([^{}]+)\}(?!\})", r"{{\1}}", content)


def convert_chat_template(template: ChatPromptTemplate) -> list[dict[str, str]]:
    """
    Convert a LangChain ChatPromptTemplate to Langfuse chat messages.

    Args:
        template: LangChain chat template built from (role, content) tuples

    Returns:
        list[dict]: Messages with role and Langfuse-style variables

    Raises:
        ValueError: If a message has no extractable template text
    """
    messages: list[dict[str, str]] = []
    for message in template.messages:
        prompt = getattr(message, "prompt", None)
        if prompt is None or not hasattr(prompt, "template"):
            raise ValueError(f"Unsupported message type: {type(message)}")
        role = type(message).__name__.replace("MessagePromptTemplate", "").lower()
        messages.append({
            "role": _ROLE_MAP.get(role, role),
            "content": _convert_variables(str(prompt.template)),
        })
    return messages


class PromptRegistry:
    """
    Singleton registry for Langfuse prompt management.

    Attributes:
        _instance: Singleton instance
        _client: Langfuse client
        _enabled: Whether Langfuse integration is enabled
    """

    _instance: "PromptRegistry | None" = None
    _client: Langfuse | None = None
    _enabled: bool = False

    def __new__(cls) -> "PromptRegistry":
        """Singleton pattern for registry instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self) -> None:
        """Initialize Langfuse client with configuration."""
        obs_settings = get_settings().observability

        if not obs_settings.enable_tracing:
            logger.info("Langfuse disabled, prompt registry inactive")
            self._enabled = False
            return

        if not obs_settings.public_key or not obs_settings.secret_key:
            logger.info("Langfuse keys not configured, prompt registry inactive")
            self._enabled = False
            return

        self._client = Langfuse(
            public_key=obs_settings.public_key,
            secret_key=obs_settings.secret_key,
            host=obs_settings.host,
        )
        self._enabled = True
        logger.info("Prompt registry initialized: host=%s", obs_settings.host)

    @property
    def is_enabled(self) -> bool:
        """Check if registry is active."""
        return self._enabled

    def register_prompt(
        self,
        name: str,
        template: ChatPromptTemplate,
        config: dict[str, Any],
        labels: list[str] | None = None,
    ) -> Any:
        """
        Register or version a chat prompt in Langfuse.

        Args:
            name: Unique prompt identifier
            template: LangChain chat template
            config: Model parameters stored with the prompt
            labels: Optional labels (e.g., ["production"])

        Returns:
            Created Langfuse prompt, or None if disabled
        """
        if not self._enabled or self._client is None:
            logger.debug("Prompt registry disabled, skipping registration: name=%s", name)
            return None

        labels = labels or []
        prompt = self._client.create_prompt(
            name=name,
            type="chat",
            prompt=convert_chat_template(template),
            config=config,
            labels=labels,
        )
        logger.info(
            "Registered chat prompt: name=%s version=%s labels=%s",
            name, prompt.version, labels,
        )
        return prompt

    def get_langchain_prompt(
        self,
        name: str,
        label: str | None = None,
    ) -> ChatPromptTemplate | None:
        """
        Fetch a prompt from Langfuse as a LangChain template.

        Args:
            name: Prompt identifier
            label: Optional label filter

        Returns:
            ChatPromptTemplate, or None if disabled
        """
        if not self._enabled or self._client is None:
            return None

        kwargs: dict[str, Any] = {"name": name}
        if label:
            kwargs["label"] = label
        prompt = self._client.get_prompt(**kwargs)

        template = ChatPromptTemplate.from_messages(prompt.get_langchain_prompt())
        template.metadata = {"langfuse_prompt": prompt}
        return template
