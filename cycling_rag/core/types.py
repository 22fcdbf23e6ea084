"""
Core data types for the cycling RAG pipeline.

This module defines the data structures passed between pipeline stages:
- FeedSource: A logical news source with ordered candidate URLs
- FeedItem: One syndication entry parsed from a feed
- FetchResult: Outcome of a single fetch attempt
- ResolvedFeed: The first candidate URL of a source that produced items
- FeedContext: Snippets and source URLs assembled for the model
- QAResult / RagAnswer: Outputs of the two flows
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import FeedError


@dataclass(frozen=True)
class FeedSource:
    """A logical news source.

    Attributes:
        name: Display name used in logs
        urls: Candidate feed URLs, tried in order until one yields items
    """
    name: str
    urls: tuple[str, ...] = ()


@dataclass(frozen=True)
class FeedItem:
    """One entry of a syndication feed.

    Missing fields are empty strings, never None.
    """
    title: str = ""
    link: str = ""
    pub_date: str = ""


@dataclass
class FetchResult:
    """Result of fetching and parsing one candidate URL.

    Either items are populated (success) or error is populated (failure).
    status_code is None for transport-level failures.

    Attributes:
        url: The URL that was fetched
        items: Parsed items, truncated to the configured maximum
        status_code: HTTP status code, or None if no response was received
        error: The FeedError raised by the attempt, None on success
    """
    url: str
    items: list[FeedItem] = field(default_factory=list)
    status_code: int | None = None
    error: FeedError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ResolvedFeed:
    """A source resolved to the first candidate URL that returned items."""
    url: str
    items: list[FeedItem]


@dataclass
class FeedContext:
    """Context assembled from all configured sources.

    Attributes:
        snippets: One formatted line per retained item, never empty
        sources: Item links followed by the resolved feed URL, per source
        skipped: Names of sources whose candidates were all exhausted
        used_fallback: True when snippets only holds the fallback line
    """
    snippets: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    used_fallback: bool = False

    @property
    def block(self) -> str:
        return "\n".join(self.snippets)


@dataclass
class QAResult:
    question: str
    answer: str


@dataclass
class RagAnswer:
    """Answer of the cycling RAG flow with the sources it was grounded on."""
    question: str
    answer: str
    sources: list[str] = field(default_factory=list)
    snippets: list[str] = field(default_factory=list)
