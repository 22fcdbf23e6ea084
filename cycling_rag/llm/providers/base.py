"""Abstract interface for text generation providers."""

from __future__ import annotations

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """Provider interface: one prompt in, one text answer out."""

    @abstractmethod
    def generate(self, prompt: str, *, event: str = "llm_generate") -> str:
        """Return the model's answer to ``prompt``.

        Raises:
            ProviderError: If the provider call fails
        """
        raise NotImplementedError
