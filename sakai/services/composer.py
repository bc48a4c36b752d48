"""System instruction composition for the chat assistant."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sakai.lib.dates import format_french_date
from sakai.schemas import Personality
from sakai.services.prompts import (
    BASE_PERSONA_INSTRUCTION,
    MEMORY_BLOCK,
    OVERRIDE_DATE_MARKERS,
    OVERRIDE_DATE_NOTICE,
    PERSONALITY_INSTRUCTIONS,
)

if TYPE_CHECKING:
    from sakai.schemas import PromptContext


def _mentions_current_date(text: str) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in OVERRIDE_DATE_MARKERS)


def persona_instruction(personality: str | None, current_date: str) -> str:
    """Base persona followed by the addendum of a known, non-default personality."""
    instruction = BASE_PERSONA_INSTRUCTION.format(current_date=current_date)
    selected = Personality.parse(personality)
    if selected is None or selected is Personality.DEFAULT:
        return instruction
    return f"{instruction}\n\n{PERSONALITY_INSTRUCTIONS[selected.value]}"


def compose_system_instruction(context: PromptContext) -> str:
    """Build the system instruction of one chat request.

    A non-blank override replaces the persona (developer mode) and gets a date
    notice unless it already states the date. The user memory, when present,
    is appended after either.

    Args:
        context: Persona selection, overrides and the reference date

    Returns:
        The instruction text
    """
    current_date = format_french_date(context.today)
    override = (context.override_system_prompt or "").strip()

    if override:
        instruction = override
        if not _mentions_current_date(override):
            instruction = f"{instruction}\n{OVERRIDE_DATE_NOTICE.format(current_date=current_date)}"
    else:
        instruction = persona_instruction(context.personality, current_date)

    memory = (context.memory or "").strip()
    if memory:
        instruction = f"{instruction}\n\n{MEMORY_BLOCK.format(memory=memory)}"
    return instruction
