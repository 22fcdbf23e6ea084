"""
Orchestration of one demo run.

This module runs the question flow, then the cycling RAG flow, and
narrates both in the log:
1. Build the LLM provider (fatal on failure)
2. Answer the free-form question (fatal on failure)
3. Assemble cycling context from the feeds and summarize transfers
   (provider failures are logged; no summary is produced)
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from .config import AppConfig
from .core.assembler import ContextAssembler
from .core.errors import ProviderError
from .core.filtering import KeywordFilter
from .core.types import QAResult, RagAnswer
from .flows import answer_question, run_cycling_rag, summary_lines
from .llm.providers.base import LLMProvider
from .llm.providers.factory import create_provider
from .llm.tracing import setup_langfuse, start_span
from .utils.logging import log_event, setup_llm_logger


@dataclass
class RunOutcome:
    """Results of one run. rag is None when the RAG flow failed."""
    qa: QAResult
    rag: RagAnswer | None = None


def build_assembler(cfg: AppConfig, logger: logging.Logger | None = None) -> ContextAssembler:
    return ContextAssembler(
        cfg.rag.feeds,
        KeywordFilter(cfg.filter.keywords),
        cfg.fetch,
        logger=logger,
    )


def run_demo(
    cfg: AppConfig,
    logger: logging.Logger,
    provider: LLMProvider | None = None,
    assembler: ContextAssembler | None = None,
) -> RunOutcome:
    """Run both flows once.

    Args:
        cfg: Application configuration
        logger: Main logger
        provider: Provider to use; built from cfg.provider when None
        assembler: Context assembler; built from cfg when None

    Returns:
        RunOutcome with the question answer and the RAG answer if any

    Raises:
        ValueError: If the provider cannot be initialized
        ProviderError: If the question flow fails
    """
    setup_langfuse(cfg.langfuse)
    if provider is None:
        log_dir = Path(cfg.logging.directory) if cfg.logging.directory else None
        llm_logger = setup_llm_logger(cfg.logging, log_dir)
        provider = create_provider(cfg.provider, cfg.logging, llm_logger)
    if assembler is None:
        assembler = build_assembler(cfg, logger)

    with start_span("cycling_rag.run", kind="chain"):
        qa = answer_question(provider, cfg.rag.question)
        log_event(logger, f"Question : {qa.question}", event="qa_question")
        log_event(logger, f"Réponse : {qa.answer}", event="qa_answer")
        log_event(logger, "")
        log_event(logger, "---- Début RAG cyclisme ----", event="rag_start")

        outcome = RunOutcome(qa=qa)
        try:
            outcome.rag = run_cycling_rag(provider, assembler, cfg.rag.cycling_question)
        except ProviderError as exc:
            log_event(
                logger,
                f"RAG cycling error: {exc}",
                level=logging.ERROR,
                event="rag_error",
            )
        else:
            _log_rag_summaries(logger, outcome.rag)

        log_event(logger, "---- Fin RAG cyclisme ----", event="rag_end")
    return outcome


def _log_rag_summaries(logger: logging.Logger, rag: RagAnswer) -> None:
    log_event(logger, "Mutations détectées :", event="rag_summary", sources=rag.sources)
    for line in summary_lines(rag.answer):
        log_event(logger, f"- {line}", event="rag_summary_line")
