"""
Cycling RAG - transfer news digests grounded on RSS feeds.

This package fetches cycling news feeds, keeps the transfer-related items
and asks a Gemini model to summarize them, citing the feed sources.

Main entry point is the CLI via the `cycling-rag` command.

Example:
    $ cycling-rag --cycling-question "Qui rejoint la Groupama-FDJ ?"
"""

__all__ = [
    "__version__",
    "ContextAssembler",
    "KeywordFilter",
    "FeedItem",
    "FeedSource",
    "resolve_feed",
    "fetch_feed_items",
]
__version__ = "0.1.0"

from .core.assembler import ContextAssembler
from .core.filtering import KeywordFilter
from .core.types import FeedItem, FeedSource
from .fetch import fetch_feed_items, resolve_feed
