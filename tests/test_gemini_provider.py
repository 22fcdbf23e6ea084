"""Tests for the Gemini provider: response parsing, errors and logging."""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from cycling_rag.config import LoggingConfig, ProviderConfig
from cycling_rag.core.errors import ProviderError
from cycling_rag.llm.providers import gemini
from cycling_rag.llm.providers.gemini import GeminiProvider, _extract_text


def _provider(llm_logger=None, **cfg_overrides) -> GeminiProvider:
    return GeminiProvider(
        ProviderConfig(**cfg_overrides),
        "test-key",
        LoggingConfig(),
        llm_logger,
    )


def _mock_gemini(monkeypatch, handler) -> None:
    real_client = httpx.Client
    transport = httpx.MockTransport(handler)

    def fake_client(**kwargs):
        return real_client(transport=transport, **kwargs)

    monkeypatch.setattr(gemini.httpx, "Client", fake_client)


def test_extract_text_joins_non_thought_parts():
    data = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"thought": True, "text": "internal reasoning"},
                        {"text": "- Pogačar"},
                        {"text": " — UAE -> UAE"},
                    ]
                }
            }
        ]
    }

    assert _extract_text(data) == "- Pogačar — UAE -> UAE"


def test_extract_text_falls_back_to_all_text_when_only_thought():
    data = {"candidates": [{"content": {"parts": [{"thought": True, "text": "first"}, {"thought": True, "text": " second"}]}}]}

    assert _extract_text(data) == "first second"


def test_extract_text_handles_missing_candidates():
    assert _extract_text({}) == ""
    assert _extract_text({"candidates": []}) == ""


def test_provider_requires_api_key():
    with pytest.raises(ValueError, match="GOOGLE_API_KEY"):
        GeminiProvider(ProviderConfig(), None, LoggingConfig(), None)


def test_provider_strips_googleai_prefix():
    assert _provider(model="googleai/gemini-2.0-flash").model == "gemini-2.0-flash"
    assert _provider(model="gemini-2.0-flash").model == "gemini-2.0-flash"


def test_generate_posts_prompt_and_returns_text(monkeypatch):
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["key"] = request.url.params.get("key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200, json={"candidates": [{"content": {"parts": [{"text": "  Réponse.  "}]}}]}
        )

    _mock_gemini(monkeypatch, handler)

    answer = _provider(model="googleai/gemini-2.0-flash").generate("Bonjour ?")

    assert answer == "Réponse."
    assert seen["path"] == "/v1beta/models/gemini-2.0-flash:generateContent"
    assert seen["key"] == "test-key"
    assert seen["body"]["contents"][0]["parts"][0]["text"] == "Bonjour ?"


def test_generate_wraps_http_errors(monkeypatch):
    _mock_gemini(monkeypatch, lambda request: httpx.Response(429, json={"error": "quota"}))

    with pytest.raises(ProviderError, match="HTTPStatusError"):
        _provider().generate("Bonjour ?")


def test_generate_logs_redacted_response(monkeypatch, caplog):
    _mock_gemini(
        monkeypatch,
        lambda request: httpx.Response(
            200,
            json={"candidates": [{"content": {"parts": [{"text": "Voir https://example.com/x"}]}}]},
        ),
    )
    llm_logger = logging.getLogger("test_gemini_llm")

    with caplog.at_level(logging.INFO, logger="test_gemini_llm"):
        _provider(llm_logger).generate("Bonjour ?", event="qa")

    record = caplog.records[-1]
    assert record.event == "qa"
    assert record.status == "ok"
    assert record.raw_response == "Voir [REDACTED_URL]"
    assert not hasattr(record, "raw_prompt")
