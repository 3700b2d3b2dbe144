"""
Register the stable assistant prompt with Langfuse.

Usage:
    python -m stablebook.scripts.register_prompt
    python -m stablebook.scripts.register_prompt --label production

Pushes a new version of the in-code chat template, tagged with the given
label (default ``development``). The assistant fetches it back when
``LANGFUSE_PUBLIC_KEY`` is set.

Dependencies: langfuse, stablebook.configs
System role: Prompt version publishing helper
"""

import logging
import sys

from stablebook.configs import get_settings
from stablebook.core.assistant.stable_assistant_prompt import register_stable_prompt
from stablebook.observability import PromptRegistry, configure_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Register the prompt; returns the process exit code."""
    argv = sys.argv[1:] if argv is None else argv
    settings = get_settings()
    configure_logging(settings.log_level)

    label = "development"
    if "--label" in argv:
        idx = argv.index("--label")
        if idx + 1 >= len(argv):
            logger.error("--label needs a value")
            return 1
        label = argv[idx + 1]

    if not PromptRegistry().is_enabled:
        logger.error("Langfuse keys are not configured; nothing registered")
        return 1

    register_stable_prompt(
        model_id=settings.assistant.model,
        temperature=settings.assistant.temperature,
        labels=[label],
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
