"""Provider factory and registry for swappable LLM backends."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...config import get_api_key
from .base import LLMProvider
from .gemini import GeminiProvider

if TYPE_CHECKING:
    from ...config import LoggingConfig, ProviderConfig


ProviderBuilder = type[LLMProvider]

_PROVIDER_REGISTRY: dict[str, ProviderBuilder] = {
    "gemini": GeminiProvider,
    "googleai": GeminiProvider,
}


def available_providers() -> list[str]:
    """Return the set of registered provider names."""
    return sorted(_PROVIDER_REGISTRY.keys())


def create_provider(
    provider_cfg: ProviderConfig,
    log_cfg: LoggingConfig,
    llm_logger: logging.Logger | None = None,
) -> LLMProvider:
    """Build a provider instance from runtime config.

    Raises:
        ValueError: If the provider is unknown or its API key is missing
    """
    name = provider_cfg.name.lower().strip()
    builder = _PROVIDER_REGISTRY.get(name)
    if builder is None:
        supported = ", ".join(available_providers())
        raise ValueError(f"Unsupported provider: {provider_cfg.name}. Supported: {supported}")
    api_key = get_api_key(provider_cfg)
    return builder(provider_cfg, api_key, log_cfg, llm_logger)
