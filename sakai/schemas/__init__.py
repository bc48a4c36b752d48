"""Data schemas using msgspec for high-performance serialization."""

from sakai.schemas.base import BaseStruct, CamelizedBaseStruct
from sakai.schemas.chat import (
    AttachmentPart,
    ChatAssistantRequest,
    ConversationMessage,
    MessagePart,
    Personality,
    PromptContext,
    StreamChunk,
    TextPart,
)
from sakai.schemas.flows import (
    ChatTitleRequest,
    ChatTitleResult,
    DocumentAnalysisRequest,
    ImageAnalysisRequest,
    ImageGenerationRequest,
    ImageGenerationResult,
    LoginThoughtRequest,
    MediaAnalysisResult,
    ProjectGenerationRequest,
    ProjectGenerationResult,
    ThoughtResult,
    TrendAnalysisRequest,
    TrendExplanationRequest,
    TrendExplanationResult,
)
from sakai.schemas.metrics import MetricDefinition, MetricEntry

__all__ = (
    "AttachmentPart",
    "BaseStruct",
    "CamelizedBaseStruct",
    "ChatAssistantRequest",
    "ChatTitleRequest",
    "ChatTitleResult",
    "ConversationMessage",
    "DocumentAnalysisRequest",
    "ImageAnalysisRequest",
    "ImageGenerationRequest",
    "ImageGenerationResult",
    "LoginThoughtRequest",
    "MediaAnalysisResult",
    "MessagePart",
    "MetricDefinition",
    "MetricEntry",
    "Personality",
    "ProjectGenerationRequest",
    "ProjectGenerationResult",
    "PromptContext",
    "StreamChunk",
    "TextPart",
    "ThoughtResult",
    "TrendAnalysisRequest",
    "TrendExplanationRequest",
    "TrendExplanationResult",
)
