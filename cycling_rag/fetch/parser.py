"""
Syndication document parsing.

Feeds are parsed with feedparser, which maps RSS 2.0 ``channel/item``
elements (and Atom/RDF equivalents) onto entries. Only the title, link and
publication date of each item are kept; unknown elements are ignored.

A body must be well-formed: feedparser's loose parser recovers entries from
broken documents, but those are rejected. Only charset and content-type
mismatches are tolerated.
"""

from __future__ import annotations

import io
from typing import Any

import feedparser

from ..core.errors import ParseError
from ..core.types import FeedItem


_TOLERATED_BOZO = (feedparser.CharacterEncodingOverride, feedparser.NonXMLContentType)


def parse_feed(content: bytes, url: str = "") -> list[FeedItem]:
    """Parse a feed body into FeedItem objects in document order.

    Args:
        content: Raw response body
        url: Feed URL, used in error messages

    Returns:
        All items of the feed; an empty list for a valid feed without items

    Raises:
        ParseError: If the body is empty or not a well-formed feed document
    """
    if not content.strip():
        raise ParseError(url, "empty body")

    parsed = feedparser.parse(io.BytesIO(content))
    if parsed.get("bozo"):
        exc = parsed.get("bozo_exception")
        if not isinstance(exc, _TOLERATED_BOZO):
            detail = f"{type(exc).__name__}: {exc}" if exc else "not a syndication document"
            raise ParseError(url, detail)
    return [_to_item(entry) for entry in parsed.get("entries") or []]


def _to_item(entry: dict[str, Any]) -> FeedItem:
    return FeedItem(
        title=_text(entry.get("title")),
        link=_link(entry),
        pub_date=_text(entry.get("published")),
    )


def _link(entry: dict[str, Any]) -> str:
    # feedparser fills entry.link from a permalink <guid>; only <link> elements populate links
    if not any(link.get("href") for link in entry.get("links") or []):
        return ""
    return _text(entry.get("link"))


def _text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()
