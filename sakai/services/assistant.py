"""Chat assistant stream relay.

Turns a conversation history into one streaming Gemini call and relays the
partial responses as ``StreamChunk`` values, ending with at most one error
chunk.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from google.genai import types

from sakai.lib.media import decode_data_uri, resolve_mime_type
from sakai.schemas import AttachmentPart, PromptContext, StreamChunk, TextPart
from sakai.services.composer import compose_system_instruction

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Sequence
    from datetime import date

    from sakai.schemas import ChatAssistantRequest, ConversationMessage, MessagePart
    from sakai.services.genai import GenAIService

logger = structlog.get_logger()

API_ROLES = frozenset({"user", "model"})

EMPTY_AFTER_FILTER_MESSAGE = "Impossible de traiter votre demande car le message est vide ou invalide."
EMPTY_HISTORY_MESSAGE = "Aucun message à envoyer : l'historique de conversation est vide."
GENERIC_STREAM_ERROR_MESSAGE = "Une erreur est survenue lors du traitement du flux."

NORMAL_FINISH_REASONS = frozenset(
    {
        types.FinishReason.FINISH_REASON_UNSPECIFIED,
        types.FinishReason.STOP,
        types.FinishReason.MAX_TOKENS,
    },
)


def _attachment_to_api_part(part: AttachmentPart) -> types.Part | None:
    if not part.image_data_uri:
        return None
    mime_type = resolve_mime_type(part.image_data_uri, part.mime_type)
    try:
        data = decode_data_uri(part.image_data_uri)
    except ValueError:
        logger.warning("Dropping attachment with an unreadable data URI", mime_type=mime_type)
        return None
    return types.Part(inline_data=types.Blob(data=data, mime_type=mime_type))


def to_api_part(part: MessagePart) -> types.Part | None:
    """Map one message part to the SDK shape, ``None`` when it carries no content."""
    if isinstance(part, TextPart):
        return types.Part(text=part.text) if part.text else None
    if isinstance(part, AttachmentPart):
        return _attachment_to_api_part(part)
    logger.warning("Unknown message part", part_type=type(part).__name__)
    return None


def normalize_history(history: Sequence[ConversationMessage]) -> list[types.Content]:
    """Keep user/model turns that still hold at least one part after mapping."""
    contents: list[types.Content] = []
    for message in history:
        if message.role not in API_ROLES:
            continue
        parts = [api_part for api_part in map(to_api_part, message.parts) if api_part is not None]
        if not parts:
            logger.warning("Message dropped: no valid content", role=message.role, message_id=message.id)
            continue
        contents.append(types.Content(role=message.role, parts=parts))
    return contents


def extract_chunk_text(chunk: types.GenerateContentResponse) -> str:
    """Text of one partial response: the direct field, else the text parts of its content."""
    text = getattr(chunk, "text", None)
    if text:
        return text
    candidates = getattr(chunk, "candidates", None)
    if not candidates:
        return ""
    content = candidates[0].content
    if content is None or not content.parts:
        return ""
    return "".join(part.text for part in content.parts if part.text and not part.thought)


def _reason_name(reason: Any) -> str:
    return str(getattr(reason, "value", reason))


def describe_final_response(response: types.GenerateContentResponse | None) -> str | None:
    """Error text for an abnormal finish or a blocked prompt, ``None`` when the response is fine."""
    if response is None:
        return None

    candidates = response.candidates or []
    if candidates:
        last = candidates[-1]
        if last.finish_reason is None or last.finish_reason in NORMAL_FINISH_REASONS:
            return None
        message = f"La génération s'est arrêtée de façon inattendue (raison : {_reason_name(last.finish_reason)})"
        if last.finish_message:
            message = f"{message} : {last.finish_message}"
        return message

    feedback = response.prompt_feedback
    if feedback is not None and feedback.block_reason:
        message = f"Votre demande a été bloquée (raison : {_reason_name(feedback.block_reason)})"
        if feedback.block_reason_message:
            message = f"{message} : {feedback.block_reason_message}"
        return message
    return None


def describe_exception(exc: BaseException) -> str:
    """Best-effort human readable message for an exception raised while streaming."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message.strip():
        return message
    if str(exc):
        return str(exc)
    cause = exc.__cause__
    if cause is not None:
        cause_message = getattr(cause, "message", None) or str(cause)
        if cause_message:
            return cause_message
    return GENERIC_STREAM_ERROR_MESSAGE


async def _close_upstream(upstream: Any) -> None:
    aclose = getattr(upstream, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception as e:  # noqa: BLE001
        logger.warning("Failed to close upstream stream", error=str(e))


class ChatAssistantService:
    """Relays one Gemini chat stream per request."""

    def __init__(self, genai_service: GenAIService) -> None:
        self.genai_service = genai_service

    async def stream_chat(
        self,
        request: ChatAssistantRequest,
        today: date | None = None,
    ) -> AsyncGenerator[StreamChunk, None]:
        """Stream the assistant's answer to ``request``.

        Text chunks come out one per upstream partial response, in upstream
        order. Every failure ends the stream with a single error chunk; no
        upstream call is made when the history holds no usable content.

        Args:
            request: History and prompt options
            today: Reference date for the system instruction

        Yields:
            Text chunks, then at most one error chunk
        """
        logger.info(
            "Chat stream requested",
            history_length=len(request.history),
            memory_present=bool(request.memory),
            override_present=bool(request.override_system_prompt),
            temperature=request.temperature,
            personality=request.personality,
        )
        instruction = compose_system_instruction(PromptContext.from_request(request, today))
        contents = normalize_history(request.history)

        if not contents:
            if request.history:
                logger.error("No valid message left after filtering a non-empty history")
                yield StreamChunk.of_error(EMPTY_AFTER_FILTER_MESSAGE)
            else:
                logger.warning("Chat stream requested with an empty history")
                yield StreamChunk.of_error(EMPTY_HISTORY_MESSAGE)
            return

        temperature = (
            request.temperature
            if request.temperature is not None
            else self.genai_service.settings.genai.DEFAULT_TEMPERATURE
        )
        upstream = None
        try:
            upstream = await self.genai_service.stream_content(contents, instruction, temperature)
            final_response = None
            async for inbound in upstream:
                final_response = inbound
                text = extract_chunk_text(inbound)
                if text:
                    yield StreamChunk.of_text(text)

            problem = describe_final_response(final_response)
            if problem:
                logger.warning("Chat stream ended abnormally", problem=problem)
                yield StreamChunk.of_error(problem)
        except Exception as e:
            logger.exception("Chat stream failed", error=str(e))
            yield StreamChunk.of_error(describe_exception(e))
        finally:
            await _close_upstream(upstream)
