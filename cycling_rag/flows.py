"""
The two demo flows.

- Question flow: send a free-form question to the model as-is.
- Cycling RAG flow: assemble transfer news from the cycling feeds, embed it
  in the prompt and return the model's answer with the sources it used.
"""

from __future__ import annotations

import threading

from .core.assembler import ContextAssembler
from .core.types import QAResult, RagAnswer
from .llm.prompts import build_cycling_prompt
from .llm.providers.base import LLMProvider
from .llm.tracing import set_span_output, start_span


DEFAULT_CYCLING_QUESTION = "Quelles sont les dernières mutations et transferts en cyclisme ?"


def answer_question(provider: LLMProvider, question: str) -> QAResult:
    with start_span("cycling_rag.qa", kind="chain", input_value=question) as span:
        answer = provider.generate(question, event="qa")
        set_span_output(span, answer)
    return QAResult(question=question, answer=answer)


def run_cycling_rag(
    provider: LLMProvider,
    assembler: ContextAssembler,
    question: str = "",
    cancel: threading.Event | None = None,
) -> RagAnswer:
    """Answer a cycling transfer question grounded on the configured feeds.

    A blank question is replaced by DEFAULT_CYCLING_QUESTION. Feed failures
    only shrink the context; provider failures propagate as ProviderError.
    """
    question = question.strip() or DEFAULT_CYCLING_QUESTION

    with start_span("cycling_rag.rag", kind="chain", input_value=question) as span:
        with start_span("cycling_rag.assemble_context", kind="retriever") as ctx_span:
            context = assembler.assemble(cancel=cancel)
            set_span_output(ctx_span, {"snippets": context.snippets, "sources": context.sources})

        prompt = build_cycling_prompt(context.block, question)
        answer = provider.generate(prompt, event="cycling_rag")
        set_span_output(span, answer)

    return RagAnswer(
        question=question,
        answer=answer,
        sources=list(context.sources),
        snippets=list(context.snippets),
    )


def summary_lines(answer: str) -> list[str]:
    """Split a model answer into bullet-free, non-blank lines."""
    lines: list[str] = []
    for line in answer.splitlines():
        text = line.strip()
        text = text.removeprefix("*")
        text = text.removeprefix("-")
        text = text.strip()
        if text:
            lines.append(text)
    return lines
