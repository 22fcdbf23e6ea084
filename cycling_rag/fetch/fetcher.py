"""
HTTP feed fetching.

Each fetch is a single bounded GET with a fixed User-Agent. There is no
retry at this layer: fallback across candidate URLs is the resolver's job.
Failures are reported as FeedError subclasses, or as FetchResult values via
fetch_feed.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import httpx

from ..core.errors import FeedError, HTTPStatusError, NetworkError
from ..core.types import FeedItem, FetchResult
from .parser import parse_feed

if TYPE_CHECKING:
    from ..config import FetchConfig


def fetch_feed_items(
    url: str,
    cfg: FetchConfig,
    limit: int | None = None,
    *,
    client: httpx.Client | None = None,
    cancel: threading.Event | None = None,
) -> list[FeedItem]:
    """Fetch one feed URL and return at most ``limit`` items.

    A new httpx client is opened and closed for the request unless one is
    passed in. Redirects are followed.

    Args:
        url: Candidate feed URL
        cfg: Fetch settings (timeout, User-Agent, default item limit)
        limit: Maximum number of items to return; defaults to cfg.max_items_per_feed
        client: Optional client to issue the request with
        cancel: Optional event; when set, the request is not issued, and a
            response still being read is abandoned

    Returns:
        The first ``limit`` items of the feed, in document order

    Raises:
        NetworkError: On transport failure or cancellation
        HTTPStatusError: If the status code is outside 200-299
        ParseError: If the body is not a syndication document
    """
    status_code, body = _get(url, cfg, client, cancel)
    return _read_items(status_code, body, url, cfg, limit)


def fetch_feed(
    url: str,
    cfg: FetchConfig,
    limit: int | None = None,
    *,
    client: httpx.Client | None = None,
    cancel: threading.Event | None = None,
) -> FetchResult:
    """Fetch one feed URL and report the outcome as a value.

    Same contract as fetch_feed_items, except that FeedError failures are
    returned in FetchResult.error instead of being raised.
    """
    status_code: int | None = None
    try:
        status_code, body = _get(url, cfg, client, cancel)
        items = _read_items(status_code, body, url, cfg, limit)
    except FeedError as exc:
        return FetchResult(url=url, status_code=status_code, error=exc)
    return FetchResult(url=url, items=items, status_code=status_code)


def _get(
    url: str,
    cfg: FetchConfig,
    client: httpx.Client | None,
    cancel: threading.Event | None,
) -> tuple[int, bytes]:
    _check_cancel(url, cancel)
    try:
        if client is None:
            with httpx.Client(
                timeout=cfg.timeout_seconds,
                follow_redirects=True,
                trust_env=cfg.trust_env,
            ) as owned:
                return _stream_body(owned, url, cfg, cancel)
        return _stream_body(client, url, cfg, cancel)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise NetworkError(url, f"{type(exc).__name__}: {exc}") from exc


def _stream_body(
    client: httpx.Client,
    url: str,
    cfg: FetchConfig,
    cancel: threading.Event | None,
) -> tuple[int, bytes]:
    headers = {"User-Agent": cfg.user_agent}
    with client.stream("GET", url, headers=headers, timeout=cfg.timeout_seconds) as resp:
        if not 200 <= resp.status_code < 300:
            return resp.status_code, b""
        _check_cancel(url, cancel)
        chunks: list[bytes] = []
        for chunk in resp.iter_bytes():
            _check_cancel(url, cancel)
            chunks.append(chunk)
        _check_cancel(url, cancel)
        return resp.status_code, b"".join(chunks)


def _check_cancel(url: str, cancel: threading.Event | None) -> None:
    # the stream is closed by the caller's context manager when this raises
    if cancel is not None and cancel.is_set():
        raise NetworkError(url, "request cancelled")


def _read_items(
    status_code: int,
    body: bytes,
    url: str,
    cfg: FetchConfig,
    limit: int | None,
) -> list[FeedItem]:
    if status_code < 200 or status_code >= 300:
        raise HTTPStatusError(url, status_code)
    if limit is None:
        limit = cfg.max_items_per_feed
    items = parse_feed(body, url)
    return items[: max(limit, 0)]
