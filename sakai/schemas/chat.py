"""Chat-related schemas for the assistant stream."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Annotated, Any

import msgspec

from sakai.schemas.base import BaseStruct, CamelizedBaseStruct

__all__ = (
    "AttachmentPart",
    "ChatAssistantRequest",
    "ConversationMessage",
    "MessagePart",
    "Personality",
    "PromptContext",
    "StreamChunk",
    "TextPart",
)


class Personality(str, Enum):
    """Behavioral presets for the assistant."""

    DEFAULT = "Sakai (par défaut)"
    DEVELOPER = "Développeur Pro"
    COACH = "Coach Bienveillant"
    COMEDIAN = "Humoriste Décalé"

    @classmethod
    def parse(cls, tag: str | None) -> Personality | None:
        """Exact match against the known tags, ``None`` for anything else."""
        if tag is None:
            return None
        try:
            return cls(tag)
        except ValueError:
            return None


class TextPart(CamelizedBaseStruct, tag_field="type", tag="text"):
    """Plain text span of a message."""

    text: str


class AttachmentPart(CamelizedBaseStruct, tag_field="type", tag="image", omit_defaults=True):
    """Binary attachment carried as a data URI.

    The wire tag is ``image`` for every attachment kind (images, PDF, text files).
    """

    image_data_uri: str = ""
    mime_type: str | None = None


MessagePart = TextPart | AttachmentPart


class ConversationMessage(CamelizedBaseStruct, omit_defaults=True):
    """One turn of the conversation history."""

    role: str  # "user" or "model"; anything else is filtered out
    parts: list[MessagePart]
    id: str | None = None
    created_at: Any = None


class ChatAssistantRequest(CamelizedBaseStruct, omit_defaults=True):
    """Inbound call for the chat stream."""

    history: list[ConversationMessage]
    memory: str | None = None
    override_system_prompt: str | None = None
    temperature: Annotated[float, msgspec.Meta(ge=0, le=1)] | None = None
    personality: str | None = None


class PromptContext(BaseStruct, kw_only=True):
    """Inputs of the system instruction, built fresh for every request."""

    personality: str | None = None
    override_system_prompt: str | None = None
    memory: str | None = None
    today: date = msgspec.field(default_factory=date.today)

    @classmethod
    def from_request(cls, request: ChatAssistantRequest, today: date | None = None) -> PromptContext:
        return cls(
            personality=request.personality,
            override_system_prompt=request.override_system_prompt,
            memory=request.memory,
            today=today or date.today(),
        )


class StreamChunk(BaseStruct, omit_defaults=True):
    """Unit of streamed output: a text increment or a terminal error."""

    text: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.error is None):
            msg = "StreamChunk carries exactly one of 'text' or 'error'"
            raise ValueError(msg)

    @classmethod
    def of_text(cls, text: str) -> StreamChunk:
        return cls(text=text)

    @classmethod
    def of_error(cls, error: str) -> StreamChunk:
        return cls(error=error)

    @property
    def is_error(self) -> bool:
        return self.error is not None
