"""Tests for the LLM provider factory."""

import pytest

from cycling_rag.config import LoggingConfig, ProviderConfig
from cycling_rag.llm.providers.factory import available_providers, create_provider
from cycling_rag.llm.providers.gemini import GeminiProvider


def test_available_providers_contains_expected_backends():
    names = available_providers()
    assert "gemini" in names
    assert "googleai" in names


def test_create_provider_gemini():
    provider = create_provider(
        ProviderConfig(name="gemini", api_key="test-key"),
        LoggingConfig(),
        llm_logger=None,
    )
    assert isinstance(provider, GeminiProvider)


def test_create_provider_reads_key_from_environment(monkeypatch):
    monkeypatch.setenv("CYCLING_TEST_KEY", "env-key")

    provider = create_provider(
        ProviderConfig(name="GoogleAI", api_key_env="CYCLING_TEST_KEY"),
        LoggingConfig(),
    )

    assert provider.api_key == "env-key"


def test_create_provider_fails_without_key(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

    with pytest.raises(ValueError, match="Missing Google API key"):
        create_provider(ProviderConfig(), LoggingConfig())


def test_create_provider_rejects_unknown_backend():
    with pytest.raises(ValueError, match="Unsupported provider"):
        create_provider(
            ProviderConfig(name="unknown-provider", api_key="test-key"),
            LoggingConfig(),
            llm_logger=None,
        )
