"""
Aggregation of feed items into model context.

The assembler walks the configured sources in declaration order, resolves
each one to a working feed, keeps the transfer-related items and formats
them as snippet lines. A source whose candidates are all exhausted is
skipped; when nothing at all could be fetched a single fallback snippet is
returned instead.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Sequence

import httpx

from ..fetch.resolver import resolve_feed
from ..utils.logging import log_event
from .errors import AllSourcesExhausted
from .filtering import KeywordFilter
from .types import FeedContext, FeedItem, FeedSource

if TYPE_CHECKING:
    from ..config import FetchConfig


DATE_PLACEHOLDER = "date inconnue"
FALLBACK_SNIPPET = (
    "- Aucun flux cyclisme accessible pour le moment. "
    "Réponds de façon générale et prudente sur les transferts récents."
)


def format_snippet(item: FeedItem) -> str:
    """Format an item as ``- <title> (<date>)``."""
    date = item.pub_date or DATE_PLACEHOLDER
    return f"- {item.title} ({date})"


class ContextAssembler:
    """Build the snippet and source lists handed to the model.

    Args:
        sources: Feed sources, aggregated in this order
        item_filter: Filter applied to the items of each resolved feed
        fetch_cfg: Fetch settings (timeout, User-Agent, item limit)
        logger: Logger narrating skipped sources and fallback usage
        client: Optional httpx client shared by all fetches
    """

    def __init__(
        self,
        sources: Sequence[FeedSource],
        item_filter: KeywordFilter,
        fetch_cfg: FetchConfig,
        *,
        logger: logging.Logger | None = None,
        client: httpx.Client | None = None,
    ):
        self.sources = tuple(sources)
        self.item_filter = item_filter
        self.fetch_cfg = fetch_cfg
        self.logger = logger or logging.getLogger("cycling_rag")
        self.client = client

    def assemble(self, cancel: threading.Event | None = None) -> FeedContext:
        """Aggregate all sources. Feed failures never propagate from here."""
        context = FeedContext()

        for source in self.sources:
            try:
                resolved = resolve_feed(
                    source.urls,
                    self.fetch_cfg,
                    self.fetch_cfg.max_items_per_feed,
                    client=self.client,
                    cancel=cancel,
                    logger=self.logger,
                )
            except AllSourcesExhausted as exc:
                context.skipped.append(source.name)
                log_event(
                    self.logger,
                    f"Skip feed {source.name}: {exc}",
                    level=logging.WARNING,
                    event="feed_skipped",
                    source=source.name,
                    urls=exc.urls,
                )
                continue

            for item in self.item_filter.apply(resolved.items):
                context.snippets.append(format_snippet(item))
                if item.link:
                    context.sources.append(item.link)
            context.sources.append(resolved.url)

        if not context.snippets:
            log_event(
                self.logger,
                "No cycling feed reachable, using fallback context",
                level=logging.WARNING,
                event="fallback_context",
                skipped=context.skipped,
            )
            context.snippets.append(FALLBACK_SNIPPET)
            context.used_fallback = True

        return context
