"""Dependency providers for the GenAI-backed services."""

from __future__ import annotations

from sakai.services.assistant import ChatAssistantService
from sakai.services.flows import AssistantFlowService
from sakai.services.genai import GenAIService, get_genai_service


async def provide_genai_service() -> GenAIService:
    """Provide the process-wide GenAI service."""
    return get_genai_service()


async def provide_assistant_service(genai_service: GenAIService) -> ChatAssistantService:
    """Provide the chat stream relay."""
    return ChatAssistantService(genai_service)


async def provide_flow_service(genai_service: GenAIService) -> AssistantFlowService:
    """Provide the one-shot flows."""
    return AssistantFlowService(genai_service)
