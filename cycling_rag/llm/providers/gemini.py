"""Google Gemini provider using the generateContent REST endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from ...core.errors import ProviderError
from ...utils.logging import log_event, redact_text, truncate_text
from ..tracing import record_span_error, set_span_output, start_span
from .base import LLMProvider

if TYPE_CHECKING:
    from ...config import LoggingConfig, ProviderConfig


_MODEL_PREFIX = "googleai/"


class GeminiProvider(LLMProvider):
    """Gemini-backed text generation."""

    def __init__(
        self,
        cfg: ProviderConfig,
        api_key: str | None,
        log_cfg: LoggingConfig,
        llm_logger: logging.Logger | None = None,
    ):
        if not api_key:
            raise ValueError(f"Missing Google API key (set {cfg.api_key_env})")
        self.cfg = cfg
        self.api_key = api_key
        self.log_cfg = log_cfg
        self.llm_logger = llm_logger

    @property
    def model(self) -> str:
        model = self.cfg.model.strip()
        if model.startswith(_MODEL_PREFIX):
            return model[len(_MODEL_PREFIX):]
        return model

    def generate(self, prompt: str, *, event: str = "llm_generate") -> str:
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.cfg.temperature,
                "maxOutputTokens": self.cfg.max_output_tokens,
            },
        }
        with start_span(
            f"gemini.{event}",
            kind="llm",
            input_value=prompt,
            attributes={"llm.model": self.model, "llm.provider": "gemini"},
        ) as span:
            try:
                data = self._post(payload)
            except (httpx.HTTPError, ValueError) as exc:
                record_span_error(span, exc)
                self._log_llm_response(event, "provider_error", str(exc), prompt)
                raise ProviderError(f"Gemini request failed: {type(exc).__name__}: {exc}") from exc
            content = _extract_text(data)
            set_span_output(span, content)
            self._log_llm_response(event, "ok", content, prompt)
        return content.strip()

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.cfg.base_url}/v1beta/models/{self.model}:generateContent"
        params = {"key": self.api_key}
        with httpx.Client(timeout=self.cfg.timeout_seconds, trust_env=self.cfg.trust_env) as client:
            resp = client.post(url, params=params, json=payload)
            resp.raise_for_status()
            return resp.json()

    def _log_llm_response(self, event: str, status: str, content: str, prompt: str) -> None:
        if self.llm_logger is None:
            return
        redaction = self.log_cfg.llm_log_redaction
        fields: dict[str, Any] = {
            "event": event,
            "status": status,
            "model": self.model,
        }
        if self.log_cfg.llm_log_detail == "prompt_response":
            fields["raw_prompt"] = truncate_text(redact_text(prompt, redaction))
        fields["raw_response"] = truncate_text(redact_text(content, redaction))
        log_event(self.llm_logger, "LLM response", **fields)


def _extract_text(data: dict[str, Any]) -> str:
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""

    if not isinstance(parts, list):
        return ""

    non_thought_chunks: list[str] = []
    all_chunks: list[str] = []
    for part in parts:
        if not isinstance(part, dict):
            continue
        text = part.get("text")
        if not text:
            continue
        chunk = str(text)
        all_chunks.append(chunk)
        if not part.get("thought"):
            non_thought_chunks.append(chunk)

    if non_thought_chunks:
        return "".join(non_thought_chunks)
    return "".join(all_chunks)
