"""One-shot assistant flows: titles, thoughts, trends, project builder and media."""

from __future__ import annotations

from typing import TYPE_CHECKING

import msgspec
import structlog
from google.genai import types

from sakai.lib.media import decode_data_uri, resolve_mime_type, to_data_uri
from sakai.lib.metrics import InsufficientTrendDataError, build_trend_request, find_metric_definition
from sakai.schemas import (
    ChatTitleResult,
    ImageGenerationResult,
    MediaAnalysisResult,
    ProjectGenerationResult,
    TextPart,
    ThoughtResult,
    TrendExplanationResult,
)
from sakai.services.prompts import (
    CHAT_TITLE_PROMPT,
    LOGIN_THOUGHT_PROMPT,
    PROJECT_GENERATOR_INSTRUCTION,
    PROJECT_GENERATOR_PROMPT,
    SAKAI_THOUGHT_PROMPT,
    TREND_EXPLANATION_PROMPT,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sakai.schemas import (
        ConversationMessage,
        DocumentAnalysisRequest,
        ImageAnalysisRequest,
        ImageGenerationRequest,
        LoginThoughtRequest,
        ProjectGenerationRequest,
        TrendAnalysisRequest,
        TrendExplanationRequest,
    )
    from sakai.services.genai import GenAIService

logger = structlog.get_logger()

DEFAULT_CHAT_TITLE = "Discussion"
DEFAULT_SAKAI_THOUGHT = "Prêt à explorer les mystères de l'univers... ou juste à trouver un bon mème ?"
DEFAULT_LOGIN_THOUGHT = "Prêt à discuter avec l'IA la plus cool ?"

PROJECT_TEMPERATURE = 0.1
IMAGE_ANALYSIS_TEMPERATURE = 0.3
DOCUMENT_ANALYSIS_TEMPERATURE = 0.4

IMAGE_SAFETY_BLOCK_MESSAGE = (
    "La génération d'image a été bloquée par les filtres de sécurité. Veuillez ajuster votre invite."
)
IMAGE_QUOTA_MESSAGE = "Limite de quota atteinte pour la génération d'images. Veuillez réessayer plus tard."
HTTP_TOO_MANY_REQUESTS = 429


def _response_text(response: types.GenerateContentResponse) -> str:
    return (response.text or "").strip()


def _strip_quotes(text: str) -> str:
    return text.strip().strip("\"'«» ").strip()


def build_title_transcript(messages: Sequence[ConversationMessage]) -> str:
    """Text-only transcript of the first messages, one speaker label per turn."""
    lines = []
    for message in messages:
        texts = [part.text for part in message.parts if isinstance(part, TextPart) and part.text]
        if not texts:
            continue
        speaker = "Utilisateur" if message.role == "user" else "Sakai"
        lines.append(f"{speaker} : {''.join(texts)}")
    return "\n".join(lines)


class AssistantFlowService:
    """Non-streaming generations backing the auxiliary pages."""

    def __init__(self, genai_service: GenAIService) -> None:
        self.genai_service = genai_service

    @property
    def _default_temperature(self) -> float:
        return self.genai_service.settings.genai.DEFAULT_TEMPERATURE

    async def generate_chat_title(self, messages: Sequence[ConversationMessage]) -> ChatTitleResult:
        """Short title for a chat session, ``Discussion`` when nothing usable comes back."""
        transcript = build_title_transcript(messages)
        if not transcript:
            return ChatTitleResult(title=DEFAULT_CHAT_TITLE)

        try:
            response = await self.genai_service.generate_content(
                CHAT_TITLE_PROMPT.format(transcript=transcript),
                temperature=self._default_temperature,
            )
        except Exception as e:  # noqa: BLE001
            logger.warning("Chat title generation failed", error=str(e))
            return ChatTitleResult(title=DEFAULT_CHAT_TITLE)

        text = _response_text(response)
        title = _strip_quotes(text.splitlines()[0]) if text else ""
        return ChatTitleResult(title=title or DEFAULT_CHAT_TITLE)

    async def generate_sakai_thought(self) -> ThoughtResult:
        try:
            response = await self.genai_service.generate_content(
                SAKAI_THOUGHT_PROMPT,
                temperature=self._default_temperature,
            )
        except Exception as e:  # noqa: BLE001
            logger.warning("Sakai thought generation failed", error=str(e))
            return ThoughtResult(thought=DEFAULT_SAKAI_THOUGHT)
        return ThoughtResult(thought=_strip_quotes(_response_text(response)) or DEFAULT_SAKAI_THOUGHT)

    async def generate_login_thought(self, request: LoginThoughtRequest) -> ThoughtResult:
        try:
            response = await self.genai_service.generate_content(
                LOGIN_THOUGHT_PROMPT.format(email_fragment=request.email_fragment),
                temperature=self._default_temperature,
            )
        except Exception as e:
            logger.exception("Login thought generation failed", error=str(e))
            return ThoughtResult(
                thought=DEFAULT_LOGIN_THOUGHT,
                error=str(e) or "Erreur lors de la génération de la pensée de connexion.",
            )

        thought = _strip_quotes(_response_text(response))
        if not thought:
            logger.warning("Login thought prompt returned nothing, using fallback")
            return ThoughtResult(thought=DEFAULT_LOGIN_THOUGHT)
        return ThoughtResult(thought=thought)

    async def explain_trend(self, request: TrendExplanationRequest) -> TrendExplanationResult:
        try:
            response = await self.genai_service.generate_content(
                TREND_EXPLANATION_PROMPT.format(
                    metrics_data=request.metrics_data,
                    trend_description=request.trend_description,
                ),
                temperature=self._default_temperature,
            )
        except Exception as e:
            logger.exception("Trend explanation failed", error=str(e))
            return TrendExplanationResult(error=str(e) or "Failed to analyze trend. Please try again.")

        explanation = _response_text(response)
        if not explanation:
            return TrendExplanationResult(error="Aucune explication n'a été générée.")
        return TrendExplanationResult(explanation=explanation)

    async def analyze_trend(self, request: TrendAnalysisRequest) -> TrendExplanationResult:
        """Explain the recent trend of one metric from its raw entries."""
        definition = find_metric_definition(request.metric_id, request.custom_metrics)
        if definition is None:
            return TrendExplanationResult(error="Metric definition not found.")
        try:
            trend_request = build_trend_request(definition, request.entries, request.period_days)
        except InsufficientTrendDataError as e:
            return TrendExplanationResult(error=str(e))
        return await self.explain_trend(trend_request)

    async def generate_project_files(self, request: ProjectGenerationRequest) -> ProjectGenerationResult:
        """Generate a Vite + React + Tailwind project as a ``{"/path": content}`` mapping."""
        try:
            response = await self.genai_service.generate_content(
                PROJECT_GENERATOR_PROMPT.format(user_input_prompt=request.user_input_prompt),
                temperature=PROJECT_TEMPERATURE,
                system_instruction=PROJECT_GENERATOR_INSTRUCTION,
                response_mime_type="application/json",
            )
        except Exception as e:
            logger.exception("Project generation failed", error=str(e))
            return ProjectGenerationResult(error=str(e) or "An unexpected error occurred during project generation.")

        raw = _response_text(response)
        if not raw:
            logger.error("Project generation returned no output")
            return ProjectGenerationResult(
                error="AI did not return the expected project files. The response might be empty or malformed.",
            )

        try:
            files = msgspec.json.decode(raw, type=dict[str, str])
        except msgspec.DecodeError as e:
            logger.error("Failed to parse project files", error=str(e), raw_length=len(raw))
            return ProjectGenerationResult(error=f"Failed to parse AI's response as JSON. Error: {e}.")

        if not files or not all(path.startswith("/") for path in files):
            logger.error("Project files have unexpected paths", paths=list(files)[:20])
            return ProjectGenerationResult(
                error="AI returned data in an unexpected format. File paths must start with '/'.",
            )
        return ProjectGenerationResult(files=files)

    async def _analyze_media(
        self,
        prompt: str,
        data_uri: str,
        mime_type: str,
        temperature: float,
        empty_message: str,
    ) -> MediaAnalysisResult:
        try:
            data = decode_data_uri(data_uri)
            response = await self.genai_service.generate_content(
                [types.Part(inline_data=types.Blob(data=data, mime_type=mime_type)), types.Part(text=prompt)],
                temperature=temperature,
            )
        except Exception as e:
            logger.exception("Media analysis failed", mime_type=mime_type, error=str(e))
            return MediaAnalysisResult(error=str(e) or "Une erreur est survenue lors de l'analyse.")

        analysis = _response_text(response)
        if not analysis:
            return MediaAnalysisResult(error=empty_message)
        return MediaAnalysisResult(analysis=analysis)

    async def analyze_image(self, request: ImageAnalysisRequest) -> MediaAnalysisResult:
        return await self._analyze_media(
            request.prompt,
            request.image_data_uri,
            resolve_mime_type(request.image_data_uri, request.mime_type),
            IMAGE_ANALYSIS_TEMPERATURE,
            "Aucune analyse textuelle n'a été générée.",
        )

    async def analyze_document(self, request: DocumentAnalysisRequest) -> MediaAnalysisResult:
        return await self._analyze_media(
            request.prompt,
            request.document_data_uri,
            resolve_mime_type(request.document_data_uri, request.mime_type),
            DOCUMENT_ANALYSIS_TEMPERATURE,
            "Aucune analyse textuelle n'a été générée pour le document.",
        )

    async def generate_image(self, request: ImageGenerationRequest) -> ImageGenerationResult:
        """Generate one image and return it inline as a data URI."""
        try:
            response = await self.genai_service.generate_content(
                request.prompt,
                temperature=self._default_temperature,
                model=self.genai_service.settings.genai.IMAGE_MODEL,
                response_modalities=["IMAGE", "TEXT"],
            )
        except Exception as e:
            logger.exception("Image generation failed", error=str(e))
            message = str(e)
            if "blocked by safety settings" in message:
                return ImageGenerationResult(error=IMAGE_SAFETY_BLOCK_MESSAGE)
            if "upstream max user-project-qpm" in message or getattr(e, "code", None) == HTTP_TOO_MANY_REQUESTS:
                return ImageGenerationResult(error=IMAGE_QUOTA_MESSAGE)
            return ImageGenerationResult(error=message or "Une erreur est survenue lors de la génération de l'image.")

        for candidate in response.candidates or []:
            if candidate.content is None:
                continue
            for part in candidate.content.parts or []:
                if part.inline_data is not None and part.inline_data.data:
                    mime_type = part.inline_data.mime_type or "image/png"
                    return ImageGenerationResult(image_url=to_data_uri(part.inline_data.data, mime_type))

        feedback = response.prompt_feedback
        if feedback is not None and feedback.block_reason:
            return ImageGenerationResult(error=IMAGE_SAFETY_BLOCK_MESSAGE)
        return ImageGenerationResult(error="Aucune image n'a été générée ou l'URL est manquante.")
