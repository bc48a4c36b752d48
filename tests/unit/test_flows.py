from __future__ import annotations

import base64
from datetime import date, timedelta
from typing import TYPE_CHECKING

import pytest
from google.genai import types

from sakai.schemas import (
    ConversationMessage,
    DocumentAnalysisRequest,
    ImageAnalysisRequest,
    ImageGenerationRequest,
    LoginThoughtRequest,
    MetricEntry,
    ProjectGenerationRequest,
    TextPart,
    TrendAnalysisRequest,
    TrendExplanationRequest,
)
from sakai.services.flows import (
    DEFAULT_CHAT_TITLE,
    DEFAULT_LOGIN_THOUGHT,
    DEFAULT_SAKAI_THOUGHT,
    IMAGE_QUOTA_MESSAGE,
    IMAGE_SAFETY_BLOCK_MESSAGE,
    AssistantFlowService,
    build_title_transcript,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from sakai.services.genai import GenAIService


@pytest.fixture
def flows(genai_service: GenAIService) -> AssistantFlowService:
    return AssistantFlowService(genai_service)


def test_title_transcript_labels_speakers() -> None:
    messages = [
        ConversationMessage(role="user", parts=[TextPart(text="Une recette de ravitoto ?")]),
        ConversationMessage(role="model", parts=[TextPart(text="Avec plaisir !")]),
    ]

    assert build_title_transcript(messages) == "Utilisateur : Une recette de ravitoto ?\nSakai : Avec plaisir !"


async def test_chat_title_is_first_line_without_quotes(flows: AssistantFlowService, fake_models, make_response) -> None:
    fake_models.response = make_response('"Recette de ravitoto"\nautre chose')

    result = await flows.generate_chat_title([ConversationMessage(role="user", parts=[TextPart(text="Ravitoto ?")])])

    assert result.title == "Recette de ravitoto"


async def test_chat_title_falls_back(flows: AssistantFlowService, fake_models) -> None:
    fake_models.error = RuntimeError("boom")
    messages = [ConversationMessage(role="user", parts=[TextPart(text="Salut")])]

    assert (await flows.generate_chat_title(messages)).title == DEFAULT_CHAT_TITLE
    assert (await flows.generate_chat_title([])).title == DEFAULT_CHAT_TITLE


async def test_sakai_thought(flows: AssistantFlowService, fake_models, make_response) -> None:
    fake_models.response = make_response("  « Le code, c'est la vie. »  ")
    assert (await flows.generate_sakai_thought()).thought == "Le code, c'est la vie."

    fake_models.response = make_response("")
    assert (await flows.generate_sakai_thought()).thought == DEFAULT_SAKAI_THOUGHT


async def test_login_thought_reports_error_with_fallback(flows: AssistantFlowService, fake_models) -> None:
    fake_models.error = RuntimeError("indisponible")

    result = await flows.generate_login_thought(LoginThoughtRequest(email_fragment="test@gm"))

    assert result.thought == DEFAULT_LOGIN_THOUGHT
    assert result.error == "indisponible"


async def test_login_thought_prompt_contains_fragment(flows: AssistantFlowService, fake_models, make_response) -> None:
    fake_models.response = make_response("Presque gmail !")

    result = await flows.generate_login_thought(LoginThoughtRequest(email_fragment="test@gm"))

    assert result.thought == "Presque gmail !"
    assert '"test@gm"' in fake_models.calls[0]["contents"]


async def test_explain_trend(flows: AssistantFlowService, fake_models, make_response) -> None:
    fake_models.response = make_response("Tu dors de mieux en mieux.")

    result = await flows.explain_trend(TrendExplanationRequest(metrics_data="[]", trend_description="Sommeil"))

    assert result.explanation == "Tu dors de mieux en mieux."
    assert result.error is None


async def test_analyze_trend_unknown_metric(flows: AssistantFlowService, fake_models) -> None:
    result = await flows.analyze_trend(TrendAnalysisRequest(metric_id="steps", entries=[]))

    assert result.error == "Metric definition not found."
    assert fake_models.calls == []


async def test_analyze_trend_with_enough_points(flows: AssistantFlowService, fake_models, make_response) -> None:
    fake_models.response = make_response("Stable.")
    today = date.today()
    entries = [
        MetricEntry(metric_id="sleep", date=(today - timedelta(days=offset)).isoformat(), value=7 + offset / 10)
        for offset in range(3)
    ]

    result = await flows.analyze_trend(TrendAnalysisRequest(metric_id="sleep", entries=entries))

    assert result.explanation == "Stable."
    assert "Sleep (hours)" in fake_models.calls[0]["contents"]


async def test_analyze_trend_insufficient_data(flows: AssistantFlowService, fake_models) -> None:
    entries = [MetricEntry(metric_id="mood", date=date.today().isoformat(), value=4)]

    result = await flows.analyze_trend(TrendAnalysisRequest(metric_id="mood", entries=entries))

    assert result.error is not None
    assert result.error.startswith("Not enough data for Mood")


async def test_project_generation(flows: AssistantFlowService, fake_models, make_response) -> None:
    fake_models.response = make_response('{"/package.json": "{}", "/src/App.tsx": "export default 1"}')

    result = await flows.generate_project_files(ProjectGenerationRequest(user_input_prompt="Une todo list"))

    assert result.files == {"/package.json": "{}", "/src/App.tsx": "export default 1"}
    config: types.GenerateContentConfig = fake_models.calls[0]["config"]
    assert config.response_mime_type == "application/json"
    assert config.temperature == 0.1
    assert "React" in config.system_instruction


@pytest.mark.parametrize(
    ("raw", "error_start"),
    [
        ("pas du json", "Failed to parse AI's response as JSON."),
        ('{"src/App.tsx": "x"}', "AI returned data in an unexpected format."),
        ("", "AI did not return the expected project files."),
    ],
)
async def test_project_generation_rejects_bad_output(
    flows: AssistantFlowService,
    fake_models,
    make_response,
    raw: str,
    error_start: str,
) -> None:
    fake_models.response = make_response(raw)

    result = await flows.generate_project_files(ProjectGenerationRequest(user_input_prompt="x"))

    assert result.files is None
    assert result.error.startswith(error_start)


async def test_image_analysis_sends_image_then_prompt(flows: AssistantFlowService, fake_models, make_response) -> None:
    fake_models.response = make_response("Un chat roux.")
    data_uri = f"data:image/jpeg;base64,{base64.b64encode(b'jpeg').decode()}"

    result = await flows.analyze_image(ImageAnalysisRequest(prompt="Décris", image_data_uri=data_uri))

    assert result.analysis == "Un chat roux."
    image_part, prompt_part = fake_models.calls[0]["contents"]
    assert image_part.inline_data.mime_type == "image/jpeg"
    assert image_part.inline_data.data == b"jpeg"
    assert prompt_part.text == "Décris"
    assert fake_models.calls[0]["config"].temperature == 0.3


async def test_document_analysis_invalid_uri(flows: AssistantFlowService, fake_models) -> None:
    result = await flows.analyze_document(
        DocumentAnalysisRequest(prompt="Résume", document_data_uri="pas un data uri", mime_type="application/pdf"),
    )

    assert result.analysis is None
    assert result.error == "Expected a base64 data URI"
    assert fake_models.calls == []


async def test_image_generation_returns_data_uri(flows: AssistantFlowService, fake_models, make_response) -> None:
    image = types.Part(inline_data=types.Blob(data=b"png-bytes", mime_type="image/png"))
    fake_models.response = make_response("Voici ton image", image)

    result = await flows.generate_image(ImageGenerationRequest(prompt="Un baobab"))

    assert result.image_url == f"data:image/png;base64,{base64.b64encode(b'png-bytes').decode()}"
    call = fake_models.calls[0]
    assert call["model"] == flows.genai_service.settings.genai.IMAGE_MODEL
    assert call["config"].response_modalities == ["IMAGE", "TEXT"]


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ("Image blocked by safety settings", IMAGE_SAFETY_BLOCK_MESSAGE),
        ("upstream max user-project-qpm reached", IMAGE_QUOTA_MESSAGE),
        ("autre panne", "autre panne"),
    ],
)
async def test_image_generation_errors(
    flows: AssistantFlowService,
    fake_models,
    message: str,
    expected: str,
) -> None:
    fake_models.error = RuntimeError(message)

    result = await flows.generate_image(ImageGenerationRequest(prompt="x"))

    assert result.error == expected


async def test_image_generation_without_image(
    flows: AssistantFlowService,
    fake_models,
    make_response: Callable[..., types.GenerateContentResponse],
) -> None:
    fake_models.response = make_response(block_reason=types.BlockedReason.SAFETY)

    result = await flows.generate_image(ImageGenerationRequest(prompt="x"))

    assert result.error == IMAGE_SAFETY_BLOCK_MESSAGE
