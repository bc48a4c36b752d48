"""Google GenAI integration service for chat streaming and one-shot generation."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Any

import structlog
from google.genai import types

from sakai.lib.settings import get_settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from google import genai

logger = structlog.get_logger()

# Same moderate threshold for every harm category.
SAFETY_SETTINGS: tuple[types.SafetySetting, ...] = tuple(
    types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE)
    for category in (
        types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    )
)


class GenAINotInitializedError(RuntimeError):
    """Raised when a generation is requested without a configured client."""


class GenAIService:
    """Gemini access through the Google GenAI SDK (Developer API or Vertex AI)."""

    def __init__(self, client: genai.Client | Any | None = None) -> None:
        """Initialize the GenAI service.

        Args:
            client: Pre-built client. When omitted, one is created from settings:
                Vertex AI if a project is configured, else the Developer API key.
        """
        self.settings = get_settings()
        self._genai_client: Any | None = client

        if client is not None:
            self._initialized = True
        elif self.settings.genai.PROJECT_ID:
            # Lazy import Google Cloud libraries
            from google import genai
            from google.cloud import aiplatform

            aiplatform.init(
                project=self.settings.genai.PROJECT_ID,
                location=self.settings.genai.LOCATION,
            )
            self._genai_client = genai.Client(
                vertexai=True,
                project=self.settings.genai.PROJECT_ID,
                location=self.settings.genai.LOCATION,
            )
            self._initialized = True
            logger.info(
                "GenAI initialized (Vertex AI)",
                project=self.settings.genai.PROJECT_ID,
                location=self.settings.genai.LOCATION,
            )
        elif self.settings.genai.API_KEY:
            from google import genai

            self._genai_client = genai.Client(api_key=self.settings.genai.API_KEY)
            self._initialized = True
            logger.info("GenAI initialized (Developer API)")
        else:
            self._initialized = False
            logger.warning("GenAI not initialized: neither GEMINI_API_KEY nor VERTEX_AI_PROJECT_ID configured")

    def _require_client(self) -> Any:
        if not self._initialized or self._genai_client is None:
            msg = "GenAI client not initialized"
            raise GenAINotInitializedError(msg)
        return self._genai_client

    @staticmethod
    def build_config(
        temperature: float,
        system_instruction: str | None = None,
        **kwargs: Any,
    ) -> types.GenerateContentConfig:
        """Generation config carrying the shared safety settings."""
        return types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=temperature,
            safety_settings=list(SAFETY_SETTINGS),
            **kwargs,
        )

    async def stream_content(
        self,
        contents: list[types.Content],
        system_instruction: str,
        temperature: float,
        model: str | None = None,
    ) -> AsyncIterator[types.GenerateContentResponse]:
        """Open one streaming generation call.

        Returns:
            The SDK's async iterator of partial responses. The last item carries
            the finish reason and prompt feedback.

        Raises:
            GenAINotInitializedError: If no client is configured
        """
        client = self._require_client()
        model_name = model or self.settings.genai.CHAT_MODEL
        logger.debug(
            "Opening chat stream",
            model=model_name,
            message_count=len(contents),
            instruction_length=len(system_instruction),
            temperature=temperature,
        )
        return await client.aio.models.generate_content_stream(
            model=model_name,
            contents=contents,
            config=self.build_config(temperature, system_instruction),
        )

    async def generate_content(
        self,
        contents: str | list[types.Content] | list[types.Part],
        temperature: float,
        system_instruction: str | None = None,
        model: str | None = None,
        **config: Any,
    ) -> types.GenerateContentResponse:
        """Single non-streaming generation call."""
        client = self._require_client()
        model_name = model or self.settings.genai.CHAT_MODEL
        return await client.aio.models.generate_content(
            model=model_name,
            contents=contents,
            config=self.build_config(temperature, system_instruction, **config),
        )

    @property
    def is_initialized(self) -> bool:
        """Check if a GenAI client is available."""
        return self._initialized


@lru_cache(maxsize=1)
def get_genai_service() -> GenAIService:
    """Process-wide GenAI service."""
    return GenAIService()
