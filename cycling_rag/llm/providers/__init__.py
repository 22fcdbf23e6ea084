"""LLM provider implementations and registry."""

from .base import LLMProvider
from .factory import available_providers, create_provider
from .gemini import GeminiProvider

__all__ = ["LLMProvider", "GeminiProvider", "available_providers", "create_provider"]
