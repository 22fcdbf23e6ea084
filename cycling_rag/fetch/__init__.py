"""
Feed fetching and resolution.

This package provides functions for fetching syndication feeds over HTTP,
parsing them into FeedItem objects, and resolving a source to the first
candidate URL that works.
"""

from .fetcher import fetch_feed, fetch_feed_items
from .parser import parse_feed
from .resolver import resolve_feed

__all__ = ["fetch_feed", "fetch_feed_items", "parse_feed", "resolve_feed"]
