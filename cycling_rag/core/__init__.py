"""
Core domain models and business logic.

This package contains data types, error types and the filtering and
aggregation logic that is independent of any transport.
"""

from .errors import (
    AllSourcesExhausted,
    FeedError,
    HTTPStatusError,
    NetworkError,
    ParseError,
    ProviderError,
)
from .filtering import KeywordFilter
from .types import FeedContext, FeedItem, FeedSource, FetchResult, QAResult, RagAnswer, ResolvedFeed

__all__ = [
    "FeedItem",
    "FeedSource",
    "FetchResult",
    "ResolvedFeed",
    "FeedContext",
    "QAResult",
    "RagAnswer",
    "KeywordFilter",
    "FeedError",
    "NetworkError",
    "HTTPStatusError",
    "ParseError",
    "AllSourcesExhausted",
    "ProviderError",
]
