"""
Command-line interface for the cycling RAG demo.

Uses Typer to provide a CLI with options for the main configuration
settings. Supports loading .env files for API key configuration.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console

from .config import load_config
from .core.errors import ProviderError
from .llm.tracing import flush
from .runner import run_demo
from .utils.logging import setup_logging

app = typer.Typer(add_completion=False)
console = Console()


@app.command()
def run(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    question: str | None = typer.Option(
        None, "--question", "-q", help="Free-form question for the question flow."
    ),
    cycling_question: str | None = typer.Option(
        None, "--cycling-question", help="Question for the cycling transfers flow."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_dir: Path | None = typer.Option(
        None, "--log-dir", help="Directory for run.jsonl and llm.jsonl log files."
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        envvar="GOOGLE_API_KEY",
        help="Override provider API key (or set GOOGLE_API_KEY / .env).",
    ),
):
    """Answer a question, then summarize cycling transfer news.

    Args:
        config: Optional path to YAML config file
        question: Override the question flow's question
        cycling_question: Override the cycling flow's question
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for log files
        api_key: Override LLM provider API key
    """
    # Load environment variables from .env if present
    load_dotenv()

    cfg = load_config(str(config) if config else None)

    if api_key:
        cfg.provider.api_key = api_key
    if question:
        cfg.rag.question = question
    if cycling_question is not None:
        cfg.rag.cycling_question = cycling_question
    if log_level:
        cfg.logging.level = log_level
    if log_dir is not None:
        cfg.logging.directory = str(log_dir)

    logger = setup_logging(
        cfg.logging, Path(cfg.logging.directory) if cfg.logging.directory else None
    )

    try:
        run_demo(cfg, logger)
    except (ValueError, ProviderError) as exc:
        console.print(f"Fatal: {exc}", style="bold red", markup=False)
        raise typer.Exit(code=1) from exc
    finally:
        flush()


if __name__ == "__main__":
    app()
