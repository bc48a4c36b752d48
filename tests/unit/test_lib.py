from __future__ import annotations

import base64
from datetime import date
from pathlib import Path

import msgspec
import pytest

from sakai.lib.files import extract_file_blocks
from sakai.lib.media import decode_data_uri, resolve_mime_type, sniff_mime_type, split_data_uri, to_data_uri
from sakai.lib.metrics import (
    InsufficientTrendDataError,
    PREDEFINED_METRICS,
    build_trend_request,
    find_metric_definition,
)
from sakai.lib.settings import AppSettings, GenAISettings
from sakai.schemas import MetricDefinition, MetricEntry
from sakai.utils.env import get_config_val

TODAY = date(2026, 10, 19)


@pytest.mark.parametrize(
    ("data_uri", "expected"),
    [
        ("data:image/png;base64,AAAA", "image/png"),
        ("data:image/jpeg;base64,AAAA", "image/jpeg"),
        ("data:image/webp;base64,AAAA", "image/webp"),
        ("data:image/gif;base64,AAAA", "image/gif"),
        ("data:application/pdf;base64,AAAA", "application/pdf"),
        ("data:text/plain;base64,AAAA", "text/plain"),
        ("data:text/markdown;base64,AAAA", "text/markdown"),
        ("data:image/heic;base64,AAAA", "image/heic"),
        ("data:application/zip;base64,AAAA", "application/octet-stream"),
        ("not a data uri", "application/octet-stream"),
    ],
)
def test_sniff_mime_type(data_uri: str, expected: str) -> None:
    assert sniff_mime_type(data_uri) == expected


def test_resolve_mime_type_prefers_explicit_specific_type() -> None:
    assert resolve_mime_type("data:image/png;base64,AAAA", "image/jpeg") == "image/jpeg"
    assert resolve_mime_type("data:image/png;base64,AAAA", "application/octet-stream") == "image/png"
    assert resolve_mime_type("data:image/png;base64,AAAA", "  ") == "image/png"


def test_data_uri_helpers() -> None:
    data_uri = to_data_uri(b"bonjour", "text/plain")

    assert split_data_uri(data_uri) == ("text/plain", base64.b64encode(b"bonjour").decode())
    assert decode_data_uri(data_uri) == b"bonjour"
    with pytest.raises(ValueError):
        split_data_uri("data:text/plain,bonjour")
    with pytest.raises(ValueError):
        decode_data_uri("data:text/plain;base64,@@@")


def test_extract_file_blocks() -> None:
    text = (
        "Voici ton fichier :\n"
        "---BEGIN_FILE: notes.md---\n# Titre\nContenu\n---END_FILE---\n"
        "Et un autre ---BEGIN_FILE: ../../etc/passwd---x---END_FILE---"
    )

    first, second = extract_file_blocks(text)

    assert first.name == "notes.md"
    assert first.content == "# Titre\nContenu"
    assert second.safe_name == "passwd"
    assert extract_file_blocks("rien ici") == []


def test_find_metric_definition() -> None:
    custom = MetricDefinition(id="steps", name="Steps", unit="steps")

    assert find_metric_definition("sleep") is PREDEFINED_METRICS[1]
    assert find_metric_definition("steps", [custom]) is custom
    assert find_metric_definition("steps") is None


def test_build_trend_request_keeps_recent_entries_of_the_metric() -> None:
    sleep = find_metric_definition("sleep")
    entries = [
        MetricEntry(metric_id="sleep", date="2026-10-19", value=8),
        MetricEntry(metric_id="sleep", date="2026-10-17", value=7.5),
        MetricEntry(metric_id="sleep", date="2026-10-12", value=6),
        MetricEntry(metric_id="sleep", date="2026-10-01", value=5),
        MetricEntry(metric_id="mood", date="2026-10-18", value=3),
    ]

    request = build_trend_request(sleep, entries, period_days=7, today=TODAY)

    assert msgspec.json.decode(request.metrics_data) == [
        {"date": "2026-10-19", "value": 8},
        {"date": "2026-10-17", "value": 7.5},
        {"date": "2026-10-12", "value": 6},
    ]
    assert request.trend_description == (
        "Analyze the trend for Sleep (hours) over the last 7 days. Data points: 3. Today is 2026-10-19."
    )


def test_build_trend_request_needs_three_points() -> None:
    water = find_metric_definition("water")
    entries = [MetricEntry(metric_id="water", date="2026-10-19", value=8)] * 2

    with pytest.raises(InsufficientTrendDataError):
        build_trend_request(water, entries, period_days=7, today=TODAY)


def test_get_config_val(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAKAI_TEST_BOOL", "true")
    monkeypatch.setenv("SAKAI_TEST_FLOAT", "0.2")
    monkeypatch.setenv("SAKAI_TEST_LIST", "a, b,,c")
    monkeypatch.setenv("SAKAI_TEST_PATH", "/tmp/sakai")

    assert get_config_val("SAKAI_TEST_BOOL", False) is True
    assert get_config_val("SAKAI_TEST_FLOAT", 0.7) == 0.2
    assert get_config_val("SAKAI_TEST_LIST", [], list[str]) == ["a", "b", "c"]
    assert get_config_val("SAKAI_TEST_PATH", Path()) == Path("/tmp/sakai")
    assert get_config_val("SAKAI_TEST_MISSING", 20) == 20


def test_genai_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    monkeypatch.setenv("GENAI_DEFAULT_TEMPERATURE", "0.3")
    monkeypatch.delenv("GENAI_CHAT_MODEL", raising=False)

    settings = GenAISettings()

    assert settings.API_KEY == "secret"
    assert settings.DEFAULT_TEMPERATURE == 0.3
    assert settings.CHAT_MODEL == "gemini-2.5-flash"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("https://a.mg, https://b.mg", ["https://a.mg", "https://b.mg"]), ('["https://a.mg"]', ["https://a.mg"])],
)
def test_cors_origins_from_env(monkeypatch: pytest.MonkeyPatch, raw: str, expected: list[str]) -> None:
    monkeypatch.setenv("ALLOWED_CORS_ORIGINS", raw)

    assert AppSettings().ALLOWED_CORS_ORIGINS == expected
