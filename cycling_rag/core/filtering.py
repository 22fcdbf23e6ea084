"""Keyword filtering of feed items by title."""

from __future__ import annotations

from typing import Iterable, Sequence

from .types import FeedItem


class KeywordFilter:
    """Keep items whose title mentions one of the keywords.

    Matching is a case-insensitive substring test on the title. When no item
    matches, the input is returned unchanged so that a feed never contributes
    an empty context.
    """

    def __init__(self, keywords: Iterable[str]):
        self.keywords = tuple(k.lower() for k in keywords if k)

    def matches(self, item: FeedItem) -> bool:
        title = item.title.lower()
        return any(kw in title for kw in self.keywords)

    def apply(self, items: Sequence[FeedItem]) -> list[FeedItem]:
        filtered = [item for item in items if self.matches(item)]
        if not filtered:
            return list(items)
        return filtered
