"""
Configuration management using YAML files and dataclasses.

Every setting has a constant default, so the program runs without any
configuration file. A YAML file may override individual sections:
- ProviderConfig: LLM provider settings
- FetchConfig: HTTP feed fetching settings
- FilterConfig: Transfer keyword filter
- RagConfig: Questions and feed sources for the flows
- LoggingConfig: Logging behavior
- LangfuseConfig: Langfuse tracing settings
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any

import yaml

from .core.types import FeedSource


DEFAULT_FEEDS: tuple[FeedSource, ...] = (
    FeedSource(
        name="L'Équipe (Cyclisme)",
        urls=("https://dwh.lequipe.fr/api/edito/rss?path=/Cyclisme/",),
    ),
    FeedSource(
        name="DirectVelo",
        urls=("https://feeds.feedburner.com/ActualitsDirectvelo",),
    ),
)

TRANSFER_KEYWORDS: tuple[str, ...] = (
    "transfert",
    "transfer",
    "mutation",
    "mercato",
    "signe",
    "signature",
    "recrut",
    "rejoint",
    "quitte",
    "engage",
    "arrive",
    "contrat",
    "renforce",
)


@dataclass
class ProviderConfig:
    """Configuration for the LLM provider.

    Attributes:
        name: Provider name ("gemini" currently supported)
        model: Model identifier; a "googleai/" prefix is accepted
        api_key_env: Environment variable name containing the API key
        base_url: Base URL for the provider API
        api_key: Optional inline API key (overrides env var)
        timeout_seconds: Request timeout for generation calls
        temperature: Sampling temperature
        max_output_tokens: Upper bound on generated tokens
        trust_env: Whether to respect system proxy settings for API requests
    """

    name: str = "gemini"
    model: str = "gemini-2.0-flash"
    api_key_env: str = "GOOGLE_API_KEY"
    base_url: str = "https://generativelanguage.googleapis.com"
    api_key: str | None = None
    timeout_seconds: float = 60.0
    temperature: float = 0.3
    max_output_tokens: int = 1024
    trust_env: bool = True


@dataclass
class FetchConfig:
    """Configuration for RSS feed fetching.

    Attributes:
        timeout_seconds: Per-request timeout
        user_agent: HTTP User-Agent header string
        max_items_per_feed: Number of items kept from each feed
        trust_env: Whether to respect system proxy settings from environment
    """

    timeout_seconds: float = 10.0
    user_agent: str = "cycling-rag/1.0 (+https://github.com/thepriben/genkit-programmez)"
    max_items_per_feed: int = 5
    trust_env: bool = True


@dataclass
class FilterConfig:
    """Case-insensitive title substrings marking transfer news."""

    keywords: tuple[str, ...] = TRANSFER_KEYWORDS


@dataclass
class RagConfig:
    """Questions and sources used by the demo flows.

    Attributes:
        question: Free-form question sent to the question flow
        cycling_question: Question sent to the cycling RAG flow
        feeds: Feed sources, in the order they are aggregated
    """

    question: str = "Le magazine Programmez!, donne-moi les informations principales en trois phrases."
    cycling_question: str = "Quelles sont les dernières mutations dans le cyclisme pro ?"
    feeds: tuple[FeedSource, ...] = DEFAULT_FEEDS


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file (requires a log directory)
        directory: Directory for log files, or None for console only
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        llm_log_enabled: Whether to enable separate LLM interaction logging
        llm_log_detail: LLM log detail level ("response_only", "prompt_response")
        llm_log_redaction: Redaction mode for LLM logs ("none", "redact_content", "redact_urls_authors")
        llm_log_file: Name of the LLM log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = True
    directory: str | None = None
    format: str = "jsonl"
    filename: str = "run.jsonl"
    llm_log_enabled: bool = True
    llm_log_detail: str = "response_only"
    llm_log_redaction: str = "redact_urls_authors"
    llm_log_file: str = "llm.jsonl"


@dataclass
class LangfuseConfig:
    """Configuration for Langfuse tracing.

    Attributes:
        enabled: Whether to enable Langfuse tracing
        public_key: Langfuse public key (optional)
        secret_key: Langfuse secret key (optional)
        base_url: Langfuse base URL (optional)
        environment: Langfuse environment label (optional)
        release: Langfuse release identifier (optional)
        timeout_seconds: Timeout for Langfuse ingestion requests
        redaction: Redaction mode for prompt/response payloads
        max_text_chars: Maximum characters for prompt/response payloads
    """

    enabled: bool = False
    public_key: str | None = None
    secret_key: str | None = None
    base_url: str | None = None
    environment: str | None = None
    release: str | None = None
    timeout_seconds: int = 30
    redaction: str = "redact_urls_authors"
    max_text_chars: int = 20000


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    rag: RagConfig = field(default_factory=RagConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    langfuse: LangfuseConfig = field(default_factory=LangfuseConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    rag = dict(data["rag"])
    rag["feeds"] = tuple(_feed_from_raw(item) for item in rag.get("feeds") or ())
    filter_cfg = dict(data["filter"])
    filter_cfg["keywords"] = tuple(str(k) for k in filter_cfg.get("keywords") or ())
    return AppConfig(
        provider=ProviderConfig(**data["provider"]),
        fetch=FetchConfig(**data["fetch"]),
        filter=FilterConfig(**filter_cfg),
        rag=RagConfig(**rag),
        logging=LoggingConfig(**data["logging"]),
        langfuse=LangfuseConfig(**data.get("langfuse", {})),
    )


def _feed_from_raw(item: Any) -> FeedSource:
    if isinstance(item, FeedSource):
        return item
    if not isinstance(item, dict) or "name" not in item:
        raise ValueError(f"Invalid feed entry: {item!r}")
    urls = item.get("urls") or []
    if isinstance(urls, str):
        urls = [urls]
    return FeedSource(name=str(item["name"]), urls=tuple(str(u) for u in urls))


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    return os.getenv(cfg.api_key_env)
