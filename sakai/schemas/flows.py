"""Request and result schemas for the one-shot assistant flows."""

from __future__ import annotations

from typing import Annotated

import msgspec

from sakai.schemas.base import CamelizedBaseStruct
from sakai.schemas.chat import ConversationMessage
from sakai.schemas.metrics import MetricDefinition, MetricEntry

__all__ = (
    "ChatTitleRequest",
    "ChatTitleResult",
    "DocumentAnalysisRequest",
    "ImageAnalysisRequest",
    "ImageGenerationRequest",
    "ImageGenerationResult",
    "LoginThoughtRequest",
    "MediaAnalysisResult",
    "ProjectGenerationRequest",
    "ProjectGenerationResult",
    "ThoughtResult",
    "TrendAnalysisRequest",
    "TrendExplanationRequest",
    "TrendExplanationResult",
)


class ChatTitleRequest(CamelizedBaseStruct):
    """First messages of a conversation, at least one."""

    messages: Annotated[list[ConversationMessage], msgspec.Meta(min_length=1)]


class ChatTitleResult(CamelizedBaseStruct):
    title: str


class ThoughtResult(CamelizedBaseStruct, omit_defaults=True):
    thought: str
    error: str | None = None


class LoginThoughtRequest(CamelizedBaseStruct, omit_defaults=True):
    email_fragment: str = ""


class TrendExplanationRequest(CamelizedBaseStruct):
    """Metrics data as a JSON string plus a description of the period to explain."""

    metrics_data: str
    trend_description: str


class TrendExplanationResult(CamelizedBaseStruct, omit_defaults=True):
    explanation: str | None = None
    error: str | None = None


class TrendAnalysisRequest(CamelizedBaseStruct, omit_defaults=True):
    """Logged entries of one metric, to be explained over the last `period_days` days."""

    metric_id: str
    entries: list[MetricEntry]
    period_days: int = 7
    custom_metrics: list[MetricDefinition] = msgspec.field(default_factory=list)


class ProjectGenerationRequest(CamelizedBaseStruct):
    user_input_prompt: str


class ProjectGenerationResult(CamelizedBaseStruct, omit_defaults=True):
    """Generated files keyed by absolute path (``/src/App.tsx``)."""

    files: dict[str, str] | None = None
    error: str | None = None


class ImageAnalysisRequest(CamelizedBaseStruct, omit_defaults=True):
    prompt: str
    image_data_uri: str
    mime_type: str | None = None


class DocumentAnalysisRequest(CamelizedBaseStruct):
    prompt: str
    document_data_uri: str
    mime_type: str


class MediaAnalysisResult(CamelizedBaseStruct, omit_defaults=True):
    analysis: str | None = None
    error: str | None = None


class ImageGenerationRequest(CamelizedBaseStruct):
    prompt: str


class ImageGenerationResult(CamelizedBaseStruct, omit_defaults=True):
    image_url: str | None = None
    error: str | None = None
