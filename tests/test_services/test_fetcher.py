"""Tests for HtmlFetcher."""

import httpx
import pytest
import respx
from httpx import Response

from venue_scraper.exceptions.custom import FetchError
from venue_scraper.schemas.scraper import ScraperConfig
from venue_scraper.services.fetcher import HtmlFetcher, build_client

URL = "https://venue.co.za/places/1"


@pytest.fixture
async def http_client():
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def fetcher(http_client, fast_config):
    return HtmlFetcher(http_client, fast_config)


def _html(body: str) -> str:
    return f"<html><body>{body}</body></html>"


@respx.mock
async def test_returns_markup(fetcher):
    respx.get(URL).mock(return_value=Response(200, html=_html("<h1>Venue</h1>")))
    html = await fetcher.fetch_html(URL)
    assert "<h1>Venue</h1>" in html


@respx.mock
async def test_sends_browser_headers(fetcher, fast_config):
    route = respx.get(URL).mock(return_value=Response(200, html=_html("")))
    await fetcher.fetch_html(URL)

    request = route.calls.last.request
    assert request.headers["User-Agent"] in fast_config.user_agents
    assert request.headers["Accept-Language"].startswith("en-ZA")
    assert request.headers["Cache-Control"] == "no-cache"
    assert "text/html" in request.headers["Accept"]


@respx.mock
async def test_retries_server_errors(fetcher):
    route = respx.get(URL).mock(
        side_effect=[Response(503), Response(200, html=_html("<p>ok</p>"))]
    )
    html = await fetcher.fetch_html(URL)
    assert "<p>ok</p>" in html
    assert route.call_count == 2


@respx.mock
async def test_retries_rate_limited_responses(fetcher):
    route = respx.get(URL).mock(
        side_effect=[Response(429), Response(200, html=_html("<p>ok</p>"))]
    )
    await fetcher.fetch_html(URL)
    assert route.call_count == 2


@respx.mock
async def test_throttle_acquired_per_attempt(fetcher):
    respx.get(URL).mock(side_effect=[Response(500), Response(200, html=_html(""))])
    await fetcher.fetch_html(URL)
    assert fetcher.limiter.request_count == 2


@respx.mock
async def test_client_error_is_not_retried(fetcher):
    route = respx.get(URL).mock(return_value=Response(404))
    with pytest.raises(FetchError) as exc_info:
        await fetcher.fetch_html(URL)

    assert route.call_count == 1
    assert exc_info.value.status_code == 404
    assert exc_info.value.url == URL
    assert "404" in exc_info.value.message


@respx.mock
async def test_exhausted_retries_raise_last_status(fetcher, fast_config):
    route = respx.get(URL).mock(return_value=Response(502))
    with pytest.raises(FetchError) as exc_info:
        await fetcher.fetch_html(URL)

    assert route.call_count == fast_config.max_retries + 1
    assert exc_info.value.status_code == 502


@respx.mock
async def test_network_errors_are_retried_then_wrapped(fetcher, fast_config):
    route = respx.get(URL).mock(side_effect=httpx.ConnectError("connection refused"))
    with pytest.raises(FetchError) as exc_info:
        await fetcher.fetch_html(URL)

    assert route.call_count == fast_config.max_retries + 1
    assert exc_info.value.status_code is None
    assert "ConnectError" in exc_info.value.message


@respx.mock
async def test_timeouts_are_reported(fetcher):
    respx.get(URL).mock(side_effect=httpx.ReadTimeout("slow"))
    with pytest.raises(FetchError, match="Timed out"):
        await fetcher.fetch_html(URL)


@respx.mock
async def test_rejects_non_html(fetcher):
    respx.get(URL).mock(return_value=Response(200, json={"name": "Venue"}))
    with pytest.raises(FetchError, match="Unsupported content type"):
        await fetcher.fetch_html(URL)


@respx.mock
async def test_accepts_xhtml(fetcher):
    respx.get(URL).mock(
        return_value=Response(
            200,
            content=b"<html><body>ok</body></html>",
            headers={"content-type": "application/xhtml+xml"},
        )
    )
    assert "ok" in await fetcher.fetch_html(URL)


@respx.mock
async def test_rejects_oversized_body(http_client):
    config = ScraperConfig(requests_per_second=1000, retry_delay_ms=0, max_body_bytes=100)
    fetcher = HtmlFetcher(http_client, config)
    respx.get(URL).mock(return_value=Response(200, html=_html("x" * 500)))
    with pytest.raises(FetchError, match="exceeds 100 bytes"):
        await fetcher.fetch_html(URL)


@respx.mock
async def test_follows_redirects(fetcher):
    respx.get(URL).mock(
        return_value=Response(301, headers={"location": "https://venue.co.za/new"})
    )
    respx.get("https://venue.co.za/new").mock(
        return_value=Response(200, html=_html("<p>moved</p>"))
    )
    assert "moved" in await fetcher.fetch_html(URL)


async def test_build_client_applies_timeout(fast_config):
    async with build_client(fast_config) as client:
        assert client.timeout.read == fast_config.timeout
        assert client.follow_redirects is True
