"""LLM providers, prompts and observability."""

from .prompts import build_cycling_prompt
from .providers import GeminiProvider, LLMProvider, available_providers, create_provider
from .tracing import flush, record_span_error, set_span_output, setup_langfuse, start_span

__all__ = [
    "LLMProvider",
    "GeminiProvider",
    "create_provider",
    "available_providers",
    "build_cycling_prompt",
    "setup_langfuse",
    "flush",
    "start_span",
    "set_span_output",
    "record_span_error",
]
