"""Tests for single-URL feed fetching."""

from __future__ import annotations

import threading

import httpx
import pytest

from cycling_rag.config import FetchConfig
from cycling_rag.core.errors import HTTPStatusError, NetworkError, ParseError
from cycling_rag.fetch import fetcher
from cycling_rag.fetch.fetcher import fetch_feed, fetch_feed_items

FEED_URL = "https://feeds.example.com/cyclisme"


def _items(n: int) -> list[dict[str, str]]:
    return [{"title": f"Article {i}", "link": f"https://example.com/{i}"} for i in range(n)]


def test_fetch_truncates_to_first_five_items_in_order(rss, mock_client):
    client = mock_client({FEED_URL: rss(_items(8))})

    items = fetch_feed_items(FEED_URL, FetchConfig(), client=client)

    assert [item.title for item in items] == [f"Article {i}" for i in range(5)]


def test_fetch_honours_explicit_limit(rss, mock_client):
    client = mock_client({FEED_URL: rss(_items(4))})

    items = fetch_feed_items(FEED_URL, FetchConfig(), 2, client=client)

    assert [item.title for item in items] == ["Article 0", "Article 1"]


def test_fetch_sends_configured_user_agent(rss):
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers["User-Agent"]
        return httpx.Response(200, content=rss(_items(1)))

    cfg = FetchConfig(user_agent="cycling-rag-test/0.1")
    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        fetch_feed_items(FEED_URL, cfg, client=client)

    assert seen["ua"] == "cycling-rag-test/0.1"


def test_fetch_opens_own_client_with_timeout(monkeypatch, rss):
    captured: dict = {}
    real_client = httpx.Client
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=rss(_items(1))))

    def fake_client(**kwargs):
        captured.update(kwargs)
        return real_client(transport=transport, **kwargs)

    monkeypatch.setattr(fetcher.httpx, "Client", fake_client)

    items = fetch_feed_items(FEED_URL, FetchConfig(timeout_seconds=10.0))

    assert len(items) == 1
    assert captured["timeout"] == 10.0
    assert captured["follow_redirects"] is True


@pytest.mark.parametrize("status", [301, 404, 500, 503])
def test_fetch_rejects_non_2xx_status(mock_client, status):
    client = mock_client({FEED_URL: status})

    with pytest.raises(HTTPStatusError) as excinfo:
        fetch_feed_items(FEED_URL, FetchConfig(), client=client)

    assert excinfo.value.status_code == status


def test_fetch_maps_timeout_to_network_error(mock_client):
    client = mock_client({FEED_URL: httpx.ReadTimeout("timed out")})

    with pytest.raises(NetworkError):
        fetch_feed_items(FEED_URL, FetchConfig(), client=client)


def test_fetch_maps_malformed_body_to_parse_error(mock_client):
    client = mock_client({FEED_URL: b"<html><body>Erreur interne"})

    with pytest.raises(ParseError):
        fetch_feed_items(FEED_URL, FetchConfig(), client=client)


def test_fetch_does_not_issue_request_when_cancelled(rss, mock_client):
    client = mock_client({FEED_URL: rss(_items(1))})
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(NetworkError, match="cancelled"):
        fetch_feed_items(FEED_URL, FetchConfig(), client=client, cancel=cancel)

    assert client.requested == []


def test_fetch_feed_reports_failures_as_values(mock_client):
    client = mock_client({FEED_URL: 503})

    result = fetch_feed(FEED_URL, FetchConfig(), client=client)

    assert not result.ok
    assert isinstance(result.error, HTTPStatusError)
    assert result.status_code == 503
    assert result.items == []


def test_fetch_feed_reports_success(rss, mock_client):
    client = mock_client({FEED_URL: rss(_items(2))})

    result = fetch_feed(FEED_URL, FetchConfig(), client=client)

    assert result.ok
    assert result.status_code == 200
    assert len(result.items) == 2


def test_fetch_abandons_response_when_cancelled_in_flight(rss):
    cancel = threading.Event()

    def handler(request: httpx.Request) -> httpx.Response:
        cancel.set()
        return httpx.Response(200, content=rss(_items(3)))

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(NetworkError, match="cancelled"):
            fetch_feed_items(FEED_URL, FetchConfig(), client=client, cancel=cancel)


def test_fetch_stops_reading_body_once_cancelled(rss):
    cancel = threading.Event()
    body = rss(_items(3))
    consumed: list[bytes] = []

    def chunks():
        consumed.append(body[:40])
        yield body[:40]
        cancel.set()
        consumed.append(body[40:])
        yield body[40:]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=chunks())

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        result = fetch_feed(FEED_URL, FetchConfig(), client=client, cancel=cancel)

    assert isinstance(result.error, NetworkError)
    assert "cancelled" in str(result.error)
    assert result.items == []
