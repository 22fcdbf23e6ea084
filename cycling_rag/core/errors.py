"""Error types raised while fetching feeds and calling the model."""

from __future__ import annotations

from typing import Sequence


class FeedError(Exception):
    """Base class for failures of a single feed URL."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.message = message


class NetworkError(FeedError):
    """Raised when a feed URL cannot be reached (timeout, DNS, refused, cancelled)."""


class HTTPStatusError(FeedError):
    """Raised when a feed responds with a status outside 200-299."""

    def __init__(self, url: str, status_code: int):
        super().__init__(url, f"status {status_code}")
        self.status_code = status_code


class ParseError(FeedError):
    """Raised when a response body is not a syndication document."""


class AllSourcesExhausted(Exception):
    """Raised when no candidate URL of a source produced any item."""

    def __init__(self, urls: Sequence[str], errors: Sequence[FeedError] = ()):
        super().__init__(f"no working URL among {list(urls)}")
        self.urls = list(urls)
        self.errors = list(errors)


class ProviderError(Exception):
    """Raised when the language model provider call fails."""
