"""Shared fixtures: RSS documents and mock HTTP transports."""

from __future__ import annotations

from typing import Callable
from xml.sax.saxutils import escape

import httpx
import pytest


def build_rss(items: list[dict[str, str]], title: str = "Cyclisme") -> bytes:
    """Build an RSS 2.0 document; each item dict may hold title/link/pubDate."""
    parts = []
    for item in items:
        fields = "".join(
            f"<{key}>{escape(value)}</{key}>" for key, value in item.items()
        )
        parts.append(f"<item>{fields}</item>")
    doc = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel>'
        f"<title>{escape(title)}</title>"
        "<link>https://example.com/</link>"
        "<description>Test feed</description>"
        f"{''.join(parts)}"
        "</channel></rss>"
    )
    return doc.encode("utf-8")


@pytest.fixture
def rss() -> Callable[..., bytes]:
    return build_rss


@pytest.fixture
def mock_client():
    """Return a factory building an httpx.Client served by a route table.

    Routes map URL -> bytes body, int status, or exception instance.
    Unknown URLs answer 404. Requested URLs are recorded in client.requested.
    """
    clients: list[httpx.Client] = []

    def factory(routes: dict[str, object]) -> httpx.Client:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            requested.append(url)
            route = routes.get(url, 404)
            if isinstance(route, Exception):
                raise route
            if isinstance(route, int):
                return httpx.Response(route, content=b"")
            return httpx.Response(200, content=route, headers={"Content-Type": "application/rss+xml"})

        client = httpx.Client(transport=httpx.MockTransport(handler))
        client.requested = requested  # type: ignore[attr-defined]
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()
