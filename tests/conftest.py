from __future__ import annotations

from types import SimpleNamespace
from typing import TYPE_CHECKING, Any

import pytest
from google.genai import types

from sakai.services.genai import GenAIService

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable


class FakeModels:
    """Stands in for ``client.aio.models`` and records every call."""

    def __init__(self) -> None:
        self.stream_chunks: list[types.GenerateContentResponse] = []
        self.open_error: Exception | None = None
        self.mid_stream_error: Exception | None = None
        self.response: types.GenerateContentResponse | None = None
        self.error: Exception | None = None
        self.stream_calls: list[dict[str, Any]] = []
        self.calls: list[dict[str, Any]] = []
        self.yielded = 0
        self.closed = False

    async def generate_content_stream(self, *, model: str, contents: Any, config: Any) -> AsyncIterator[Any]:
        self.stream_calls.append({"model": model, "contents": contents, "config": config})
        if self.open_error is not None:
            raise self.open_error
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[types.GenerateContentResponse]:
        try:
            for chunk in self.stream_chunks:
                self.yielded += 1
                yield chunk
            if self.mid_stream_error is not None:
                raise self.mid_stream_error
        finally:
            self.closed = True

    async def generate_content(self, *, model: str, contents: Any, config: Any) -> types.GenerateContentResponse:
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def build_response(
    *parts: types.Part | str,
    finish_reason: types.FinishReason | None = None,
    finish_message: str | None = None,
    block_reason: types.BlockedReason | None = None,
    block_reason_message: str | None = None,
) -> types.GenerateContentResponse:
    if block_reason is not None:
        return types.GenerateContentResponse(
            candidates=[],
            prompt_feedback=types.GenerateContentResponsePromptFeedback(
                block_reason=block_reason,
                block_reason_message=block_reason_message,
            ),
        )
    content = types.Content(
        role="model",
        parts=[types.Part(text=part) if isinstance(part, str) else part for part in parts],
    )
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=content, finish_reason=finish_reason, finish_message=finish_message)],
    )


@pytest.fixture
def fake_models() -> FakeModels:
    return FakeModels()


@pytest.fixture
def genai_service(fake_models: FakeModels) -> GenAIService:
    """GenAI service backed by the in-memory fake client."""
    return GenAIService(client=SimpleNamespace(aio=SimpleNamespace(models=fake_models)))


@pytest.fixture
def make_response() -> Callable[..., types.GenerateContentResponse]:
    return build_response
