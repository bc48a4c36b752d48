"""Service layer wrapping the Google GenAI SDK."""

from __future__ import annotations

from sakai.services.assistant import ChatAssistantService
from sakai.services.flows import AssistantFlowService
from sakai.services.genai import GenAIService

__all__ = (
    "AssistantFlowService",
    "ChatAssistantService",
    "GenAIService",
)
