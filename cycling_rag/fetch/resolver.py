"""Resolution of a logical source to the first candidate URL that works."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Sequence

import httpx

from ..core.errors import AllSourcesExhausted, FeedError
from ..core.types import ResolvedFeed
from ..utils.logging import log_event
from .fetcher import fetch_feed

if TYPE_CHECKING:
    from ..config import FetchConfig


def resolve_feed(
    urls: Sequence[str],
    cfg: FetchConfig,
    limit: int | None = None,
    *,
    client: httpx.Client | None = None,
    cancel: threading.Event | None = None,
    logger: logging.Logger | None = None,
) -> ResolvedFeed:
    """Try each candidate URL in order and return the first non-empty feed.

    Candidates after the first success are never requested. Failed attempts
    are logged and iteration moves on to the next URL. Events go to the
    "cycling_rag" logger unless another one is passed.

    Raises:
        AllSourcesExhausted: If every candidate failed or returned no items
    """
    logger = logger or logging.getLogger("cycling_rag")
    errors: list[FeedError] = []
    for url in urls:
        result = fetch_feed(url, cfg, limit, client=client, cancel=cancel)
        if result.ok and result.items:
            log_event(
                logger,
                f"Feed resolved: {url} ({len(result.items)} items)",
                event="feed_resolved",
                url=url,
                count=len(result.items),
            )
            return ResolvedFeed(url=url, items=result.items)
        if result.error is not None:
            errors.append(result.error)
            log_event(
                logger,
                f"Feed attempt failed ({url}): {result.error}",
                level=logging.WARNING,
                event="feed_attempt_failed",
                url=url,
                error_type=type(result.error).__name__,
                status_code=result.status_code,
            )
        else:
            log_event(
                logger,
                f"Feed returned no items: {url}",
                level=logging.DEBUG,
                event="feed_empty",
                url=url,
            )
    raise AllSourcesExhausted(urls, errors)
