"""Tests for VenueScraper, the scraper registry and shared name extraction."""

import httpx
import pytest
import respx
from bs4 import BeautifulSoup
from httpx import Response

from venue_scraper.exceptions.custom import UnknownCategoryError
from venue_scraper.schemas.venues import RestaurantData
from venue_scraper.scrapers import restaurant
from venue_scraper.scrapers.base import VenueScraper, extract_name
from venue_scraper.scrapers.registry import create_scraper
from venue_scraper.services.fetcher import HtmlFetcher


@pytest.fixture
async def http_client():
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def scraper(http_client, fast_config):
    return VenueScraper(HtmlFetcher(http_client, fast_config), restaurant.extract)


def _html(body: str, head: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


def _soup(body: str, head: str = "") -> BeautifulSoup:
    return BeautifulSoup(_html(body, head), "html.parser")


# --- Name ---


def test_name_uses_selector_priority():
    soup = _soup('<h1>Generic</h1><h1 class="restaurant-name">The Grill House</h1>')
    assert extract_name(soup, restaurant.NAME_SELECTORS) == "The Grill House"


def test_name_falls_back_to_og_title():
    soup = _soup("<p>no heading</p>", head='<meta property="og:title" content="Og Name"><title>Title</title>')
    assert extract_name(soup, restaurant.NAME_SELECTORS) == "Og Name"


def test_name_falls_back_to_title():
    soup = _soup("<p>no heading</p>", head="<title> Page  Title </title>")
    assert extract_name(soup, restaurant.NAME_SELECTORS) == "Page Title"


def test_name_empty_when_nothing_found():
    assert extract_name(_soup("<p>nothing</p>"), restaurant.NAME_SELECTORS) == ""


# --- scrape ---


@respx.mock
async def test_scrape_success(scraper):
    url = "https://venue.co.za/grill"
    respx.get(url).mock(return_value=Response(200, html=_html("<h1>The Grill</h1>")))

    result = await scraper.scrape(url)

    assert result.success is True
    assert result.url == url
    assert result.error is None
    assert isinstance(result.data, RestaurantData)
    assert result.data.name == "The Grill"


@respx.mock
async def test_scrape_failure_becomes_result(scraper):
    url = "https://venue.co.za/missing"
    respx.get(url).mock(return_value=Response(404))

    result = await scraper.scrape(url)

    assert result.success is False
    assert result.data is None
    assert result.url == url
    assert "404" in result.error


async def test_scrape_rejects_invalid_url(scraper):
    result = await scraper.scrape("not-a-url")
    assert result.success is False
    assert "Invalid URL" in result.error


@respx.mock
async def test_scrape_catches_extractor_errors(http_client, fast_config):
    def broken(soup, url):
        raise RuntimeError()

    scraper = VenueScraper(HtmlFetcher(http_client, fast_config), broken)
    url = "https://venue.co.za/grill"
    respx.get(url).mock(return_value=Response(200, html=_html("")))

    result = await scraper.scrape(url)
    assert result.success is False
    assert result.error == "RuntimeError"


@respx.mock
async def test_scrape_list_preserves_order(scraper):
    urls = [f"https://venue.co.za/{i}" for i in range(3)]
    respx.get(urls[0]).mock(return_value=Response(200, html=_html("<h1>Zero</h1>")))
    respx.get(urls[1]).mock(return_value=Response(404))
    respx.get(urls[2]).mock(return_value=Response(200, html=_html("<h1>Two</h1>")))

    results = await scraper.scrape_list(urls)

    assert [r.url for r in results] == urls
    assert [r.success for r in results] == [True, False, True]
    assert results[2].data.name == "Two"


@respx.mock
async def test_scrape_retries_transient_failures(scraper):
    url = "https://venue.co.za/flaky"
    route = respx.get(url).mock(
        side_effect=[Response(503), Response(200, html=_html("<h1>Back</h1>"))]
    )
    result = await scraper.scrape(url)
    assert result.success is True
    assert route.call_count == 2


# --- Registry ---


@pytest.mark.parametrize("category", ["restaurant", "hotel", "attraction", "activity"])
def test_create_scraper_for_each_category(http_client, fast_config, category):
    scraper = create_scraper(category, http_client, fast_config)
    assert isinstance(scraper, VenueScraper)


def test_create_scraper_unknown_category(http_client, fast_config):
    with pytest.raises(UnknownCategoryError) as exc_info:
        create_scraper("museum", http_client, fast_config)
    assert exc_info.value.category == "museum"


@respx.mock
async def test_created_scraper_extracts_its_category(http_client, fast_config):
    url = "https://venue.co.za/hotel"
    respx.get(url).mock(return_value=Response(200, html=_html("<h1>Sea View</h1>")))

    result = await create_scraper("hotel", http_client, fast_config).scrape(url)
    assert result.data.category == "hotel"
