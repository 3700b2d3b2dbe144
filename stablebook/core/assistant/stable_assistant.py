"""
Stable assistant implementation.

Answers free-text questions about a tenant's stable with Gemini. The
tenant's horses, recent visits, vaccines with a next date and active
pregnancies are rendered into a JSON context block for the prompt; the
assistant has no tools and never writes.

Dependencies: langchain_google_genai, langchain_core
System role: Read-only chat assistant over stable records
"""

import json
import logging
from typing import Any, Iterable

from langchain_google_genai import ChatGoogleGenerativeAI

from stablebook.core.assistant.stable_assistant_prompt import (
    get_stable_prompt,
    register_stable_prompt,
)
from stablebook.core.exceptions import AssistantUnavailableError

logger = logging.getLogger(__name__)

UNKNOWN_PARENT = "Unknown"


def _value(field: Any) -> Any:
    return getattr(field, "value", field)


def build_context(
    horses: Iterable[Any],
    visits: Iterable[Any],
    vaccines: Iterable[Any],
    pregnancies: Iterable[Any],
    recent_visits: int = 10,
) -> str:
    """
    Render stable records into the prompt context block.

    Visits are expected newest first; only the first ``recent_visits`` are
    included. Vaccines without a next date and ended pregnancies are left
    out.

    Args:
        horses: Horse records
        visits: Visit records, newest first
        vaccines: Vaccine records
        pregnancies: Pregnancy records
        recent_visits: Number of visits to include

    Returns:
        str: Multi-line context block
    """
    horse_rows = [
        {
            "id": h.id,
            "name": h.name,
            "age": h.age,
            "breed": h.breed,
            "gender": _value(h.gender),
            "father": h.father_name or UNKNOWN_PARENT,
            "mother": h.mother_name or UNKNOWN_PARENT,
        }
        for h in horses
    ]
    visit_rows = [
        {
            "date": v.date,
            "horseId": v.horse_id,
            "type": _value(v.type),
            "vet": v.vet_name,
            "notes": v.notes,
        }
        for v in list(visits)[:recent_visits]
    ]
    vaccine_rows = [
        {"date": v.date, "nextDate": v.next_date, "horseId": v.horse_id, "type": v.type}
        for v in vaccines
        if v.next_date
    ]
    pregnancy_rows = [
        {"horseId": p.horse_id, "due": p.expected_date, "stallion": p.stallion_name}
        for p in pregnancies
        if _value(p.status) != "ended"
    ]

    def dump(rows: list[dict[str, Any]]) -> str:
        return json.dumps(rows, ensure_ascii=False, default=str)

    return "\n".join([
        f"- Horses: {dump(horse_rows)}",
        f"- Recent Visits: {dump(visit_rows)}",
        f"- Upcoming Vaccines: {dump(vaccine_rows)}",
        f"- Active Pregnancies: {dump(pregnancy_rows)}",
    ])


class StableAssistant:
    """
    Gemini-backed assistant over a tenant's stable records.

    The chat model is created lazily so the service starts without an API
    key; a reply attempt without one raises AssistantUnavailableError.
    """

    def __init__(
        self,
        api_key: str | None,
        model_id: str = "gemini-2.5-flash",
        temperature: float = 0.3,
        recent_visits: int = 10,
        use_prompt_registry: bool = False,
        prompt_label: str | None = None,
        model: Any = None,
    ) -> None:
        """
        Initialize the assistant.

        Args:
            api_key: Gemini API key (None disables replies)
            model_id: Gemini model name
            temperature: Sampling temperature
            recent_visits: Number of visits included in the context
            use_prompt_registry: Whether to register and fetch the prompt via Langfuse
            prompt_label: Optional label filter when using registry
            model: Pre-built chat model, used by tests
        """
        self._api_key = api_key
        self._model_id = model_id
        self._temperature = temperature
        self._recent_visits = recent_visits
        self._use_prompt_registry = use_prompt_registry
        self._prompt_label = prompt_label
        self._model = model

        if use_prompt_registry:
            register_stable_prompt(
                model_id=model_id,
                temperature=temperature,
                labels=[prompt_label] if prompt_label else None,
            )

    @property
    def is_configured(self) -> bool:
        """Whether replies can be generated."""
        return self._model is not None or bool(self._api_key)

    def _get_model(self) -> Any:
        if self._model is None:
            if not self._api_key:
                raise AssistantUnavailableError("Gemini API key not configured")
            self._model = ChatGoogleGenerativeAI(
                model=self._model_id,
                temperature=self._temperature,
                google_api_key=self._api_key,
            )
        return self._model

    async def reply(
        self,
        question: str,
        horses: Iterable[Any],
        visits: Iterable[Any],
        vaccines: Iterable[Any],
        pregnancies: Iterable[Any],
    ) -> str:
        """
        Answer a question about the given records.

        Args:
            question: User's message
            horses: Horses visible to the caller
            visits: Tenant visits, newest first
            vaccines: Tenant vaccines
            pregnancies: Tenant pregnancies

        Returns:
            str: Generated reply text

        Raises:
            AssistantUnavailableError: If no API key is configured
        """
        model = self._get_model()
        prompt = get_stable_prompt(
            use_registry=self._use_prompt_registry,
            label=self._prompt_label,
        )
        context = build_context(horses, visits, vaccines, pregnancies, self._recent_visits)

        messages = prompt.invoke({"context": context, "question": question}).to_messages()
        response = await model.ainvoke(messages)
        logger.debug("Assistant replied", extra={"model": self._model_id})
        return _content_text(response.content)


def _content_text(content: Any) -> str:
    """Flatten a chat model content payload (string or content blocks) to text."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)
