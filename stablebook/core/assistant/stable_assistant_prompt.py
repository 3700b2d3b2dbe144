"""
Stable assistant prompt.

Defines the chat template used to answer questions about a tenant's
stable. The stable data is rendered into the human message as a context
block; the system message fixes tone and the no-invention rule.
Supports Langfuse prompt registry integration.

Dependencies: langchain_core.prompts, stablebook.observability
System role: Prompt template for the stable assistant
"""

import logging

from langchain_core.prompts import ChatPromptTemplate

from stablebook.observability.prompt_registry import PromptRegistry

logger = logging.getLogger(__name__)

STABLE_PROMPT_NAME = "stable-assistant"

SYSTEM_PROMPT = """You are an expert equine veterinary assistant and stable manager.
Your role is to provide professional, accurate and helpful insights based on the stable's records.

## Instructions
1. Always check the provided data for specific horse details (age, breed, lineage, medical history)
2. If asked about a horse, mention its father and mother when they are recorded
3. If the answer is not in the data, state clearly that the records do not contain it
4. Never invent horses, dates or treatments that are not in the data
5. Use bullet points for lists and keep paragraphs concise
6. Answer in the language the question is written in"""

STABLE_ASSISTANT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """Current Stable Data:
{context}

Question: {question}"""),
])


def register_stable_prompt(
    model_id: str,
    temperature: float,
    labels: list[str] | None = None,
) -> None:
    """
    Register the assistant prompt with Langfuse.

    Args:
        model_id: Gemini model name stored with the prompt
        temperature: Model temperature
        labels: Optional labels (e.g., ["production", "staging"])
    """
    registry = PromptRegistry()

    if not registry.is_enabled:
        logger.debug("Prompt registry disabled, skipping registration")
        return

    registry.register_prompt(
        name=STABLE_PROMPT_NAME,
        template=STABLE_ASSISTANT_PROMPT,
        config={"model": model_id, "temperature": temperature},
        labels=labels or ["development"],
    )
    logger.info("Registered assistant prompt: name=%s", STABLE_PROMPT_NAME)


def get_stable_prompt(
    use_registry: bool = False,
    label: str | None = None,
) -> ChatPromptTemplate:
    """
    Get the assistant prompt template.

    Args:
        use_registry: Whether to fetch from Langfuse registry
        label: Optional label filter when using registry

    Returns:
        ChatPromptTemplate: Prompt for the stable assistant
    """
    if use_registry:
        registry = PromptRegistry()
        if registry.is_enabled:
            prompt = registry.get_langchain_prompt(STABLE_PROMPT_NAME, label=label)
            if prompt is not None:
                logger.debug("Using prompt from registry: name=%s", STABLE_PROMPT_NAME)
                return prompt
            logger.debug("Prompt not found in registry, using local template")

    return STABLE_ASSISTANT_PROMPT
