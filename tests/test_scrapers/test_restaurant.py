"""Tests for the restaurant extractor."""

import httpx
import respx
from bs4 import BeautifulSoup
from httpx import Response

from venue_scraper.scrapers import restaurant
from venue_scraper.scrapers.registry import create_scraper

URL = "https://eats.co.za/cape-town/the-grill"

PAGE = """
<html>
<head><title>The Grill | Eats</title></head>
<body>
  <h1 class="restaurant-name">The Grill</h1>
  <div itemprop="address">12 Long Street, Cape Town</div>
  <a href="tel:0214561234">Call</a>
  <div class="restaurant-description">Wood-fired steaks and fresh fish.</div>
  <span class="rating-value">4.6</span>
  <div class="cuisine-tags"><span>Italian</span><span>Seafood</span></div>
  <div class="price-range">Mains around R250</div>
  <ul class="features"><li>Live music</li></ul>
  <p>Outdoor seating on the terrace. Free WiFi.</p>
  <ul class="opening-hours">
    <li>Mon - Fri: 12:00 - 22:00</li>
    <li>Sunday: Closed</li>
  </ul>
  <div class="gallery"><img src="/img/grill.jpg"><img src="/img/logo.svg"></div>
  <div id="map" data-lat="-33.9210" data-lng="18.4181"></div>
</body>
</html>
"""


def _soup(body: str) -> BeautifulSoup:
    return BeautifulSoup(f"<html><body>{body}</body></html>", "html.parser")


def test_extracts_full_page():
    data = restaurant.extract(BeautifulSoup(PAGE, "html.parser"), URL)

    assert data.category == "restaurant"
    assert data.name == "The Grill"
    assert data.address == "12 Long Street, Cape Town"
    assert data.phone == "27214561234"
    assert data.description == "Wood-fired steaks and fresh fish."
    assert data.rating == 4.6
    assert data.cuisine == ["Italian", "Seafood"]
    assert data.price_range == "$$"
    assert data.features == ["Live music", "outdoor seating", "wifi"]
    assert data.images == ["https://eats.co.za/img/grill.jpg"]
    assert (data.coordinates.lat, data.coordinates.lng) == (-33.921, 18.4181)
    assert data.opening_hours == {
        "monday": "12:00 - 22:00",
        "tuesday": "12:00 - 22:00",
        "wednesday": "12:00 - 22:00",
        "thursday": "12:00 - 22:00",
        "friday": "12:00 - 22:00",
        "sunday": "Closed",
    }


def test_extraction_is_deterministic():
    first = restaurant.extract(BeautifulSoup(PAGE, "html.parser"), URL)
    second = restaurant.extract(BeautifulSoup(PAGE, "html.parser"), URL)
    assert first == second


def test_cuisine_merges_meta_content():
    soup = _soup(
        '<span class="cuisine-type">Thai</span>'
        '<meta name="cuisine" content="Thai, Vietnamese ,">'
    )
    assert restaurant.extract_cuisine(soup) == ["Thai", "Vietnamese"]


def test_cuisine_ignores_long_text():
    soup = _soup(f'<span class="food-type">{"A very long cuisine description " * 2}</span>')
    assert restaurant.extract_cuisine(soup) == []


def test_declared_price_range_wins():
    soup = _soup('<span itemprop="priceRange">$$$</span><div class="price-range">R45</div>')
    assert restaurant.extract_price(soup) == "$$$"


def test_malformed_declared_price_range_falls_back():
    soup = _soup('<span itemprop="priceRange">R100-R200</span><div class="pricing">From R45</div>')
    assert restaurant.extract_price(soup) == "$"


def test_no_price_information():
    assert restaurant.extract_price(_soup("<p>Ask for the menu</p>")) is None


def test_minimal_page_has_empty_collections():
    data = restaurant.extract(_soup("<h1>Corner Cafe</h1>"), URL)
    assert data.name == "Corner Cafe"
    assert data.cuisine == []
    assert data.features == []
    assert data.images == []
    assert data.opening_hours is None
    assert data.price_range is None
    assert data.coordinates is None


@respx.mock
async def test_scrapes_restaurant_end_to_end(fast_config):
    respx.get(URL).mock(return_value=Response(200, html=PAGE))

    async with httpx.AsyncClient() as client:
        result = await create_scraper("restaurant", client, fast_config).scrape(URL)

    assert result.success is True
    payload = result.model_dump(mode="json", by_alias=True)
    assert payload["data"]["priceRange"] == "$$"
    assert payload["data"]["cuisine"] == ["Italian", "Seafood"]
    assert payload["data"]["openingHours"]["sunday"] == "Closed"


def test_cuisine_whitespace_is_normalized():
    soup = _soup(
        '<span class="cuisine-type">South\n   African</span>'
        '<meta name="cuisine" content="South  African, Braai">'
    )
    assert restaurant.extract_cuisine(soup) == ["South African", "Braai"]
