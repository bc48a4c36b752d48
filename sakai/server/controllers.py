"""HTTP controllers for the Sakai assistant."""

from __future__ import annotations

from contextlib import aclosing
from typing import TYPE_CHECKING, Any

import msgspec
from litestar import Controller, get, post
from litestar.di import Provide
from litestar.response import Stream
from litestar.status_codes import HTTP_200_OK

from sakai.server import deps

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sakai import schemas as s
    from sakai.services.assistant import ChatAssistantService
    from sakai.services.flows import AssistantFlowService
    from sakai.services.genai import GenAIService


def encode_event(chunk: s.StreamChunk) -> str:
    """Server-Sent Event carrying one JSON-encoded chunk."""
    return f"data: {msgspec.json.encode(chunk).decode()}\n\n"


class AssistantController(Controller):
    """Chat stream and one-shot assistant flows."""

    dependencies = {
        "genai_service": Provide(deps.provide_genai_service),
        "assistant_service": Provide(deps.provide_assistant_service),
        "flow_service": Provide(deps.provide_flow_service),
    }

    @post(path="/api/chat/stream", name="chat.stream", status_code=HTTP_200_OK)
    async def stream_chat(self, data: s.ChatAssistantRequest, assistant_service: ChatAssistantService) -> Stream:
        """Stream the assistant's answer using Server-Sent Events."""

        async def generate() -> AsyncGenerator[str, None]:
            async with aclosing(assistant_service.stream_chat(data)) as chunks:
                async for chunk in chunks:
                    yield encode_event(chunk)

        return Stream(
            generate(),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache, no-store, must-revalidate",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",
                "X-Content-Type-Options": "nosniff",
            },
        )

    @post(path="/api/chat/title", name="chat.title", status_code=HTTP_200_OK)
    async def chat_title(self, data: s.ChatTitleRequest, flow_service: AssistantFlowService) -> s.ChatTitleResult:
        """Generate a short title for a chat session."""
        return await flow_service.generate_chat_title(data.messages)

    @get(path="/api/thought", name="thought.sakai")
    async def sakai_thought(self, flow_service: AssistantFlowService) -> s.ThoughtResult:
        """Get a short joke or fun fact from Sakai."""
        return await flow_service.generate_sakai_thought()

    @post(path="/api/thought/login", name="thought.login", status_code=HTTP_200_OK)
    async def login_thought(self, data: s.LoginThoughtRequest, flow_service: AssistantFlowService) -> s.ThoughtResult:
        """Comment on the e-mail being typed on the login page."""
        return await flow_service.generate_login_thought(data)

    @post(path="/api/trends/explain", name="trends.explain", status_code=HTTP_200_OK)
    async def explain_trend(
        self,
        data: s.TrendExplanationRequest,
        flow_service: AssistantFlowService,
    ) -> s.TrendExplanationResult:
        """Explain a described trend in prepared metrics data."""
        return await flow_service.explain_trend(data)

    @post(path="/api/trends/analyze", name="trends.analyze", status_code=HTTP_200_OK)
    async def analyze_trend(
        self,
        data: s.TrendAnalysisRequest,
        flow_service: AssistantFlowService,
    ) -> s.TrendExplanationResult:
        """Explain the recent trend of one metric from its logged entries."""
        return await flow_service.analyze_trend(data)

    @post(path="/api/builder/project", name="builder.project", status_code=HTTP_200_OK)
    async def generate_project(
        self,
        data: s.ProjectGenerationRequest,
        flow_service: AssistantFlowService,
    ) -> s.ProjectGenerationResult:
        """Generate the files of a small React project."""
        return await flow_service.generate_project_files(data)

    @post(path="/api/image/analyze", name="image.analyze", status_code=HTTP_200_OK)
    async def analyze_image(
        self,
        data: s.ImageAnalysisRequest,
        flow_service: AssistantFlowService,
    ) -> s.MediaAnalysisResult:
        """Analyze an image with a text prompt."""
        return await flow_service.analyze_image(data)

    @post(path="/api/document/analyze", name="document.analyze", status_code=HTTP_200_OK)
    async def analyze_document(
        self,
        data: s.DocumentAnalysisRequest,
        flow_service: AssistantFlowService,
    ) -> s.MediaAnalysisResult:
        """Analyze a PDF or text document with a text prompt."""
        return await flow_service.analyze_document(data)

    @post(path="/api/image/generate", name="image.generate", status_code=HTTP_200_OK)
    async def generate_image(
        self,
        data: s.ImageGenerationRequest,
        flow_service: AssistantFlowService,
    ) -> s.ImageGenerationResult:
        """Generate an image from a text prompt."""
        return await flow_service.generate_image(data)

    @get(path="/health", name="health", include_in_schema=False)
    async def health(self, genai_service: GenAIService) -> dict[str, Any]:
        """Report whether a GenAI client is configured."""
        return {"status": "ok", "genai": genai_service.is_initialized}
