from bs4 import BeautifulSoup

from venue_scraper.extractors.fields import (
    clean_text,
    extract_images,
    extract_phone,
    extract_price_range,
    extract_rating,
    extract_website,
    list_items,
    unique,
)
from venue_scraper.extractors.hours import extract_opening_hours
from venue_scraper.extractors.keywords import detect_keywords
from venue_scraper.extractors.location import extract_coordinates
from venue_scraper.extractors.policy import container_text
from venue_scraper.scrapers.base import extract_name, optional_text
from venue_scraper.schemas.venues import RestaurantData

NAME_SELECTORS = ("h1.restaurant-name", "h1.business-name", ".name-header", "h1")
ADDRESS_SELECTORS = ('[itemprop="address"]', ".address", ".location-address")
DESCRIPTION_SELECTORS = (".restaurant-description", ".description", ".about-section", ".overview")
PRICE_CONTAINERS = (".price-range", ".price-info", ".pricing")
IMAGE_SELECTOR = ".gallery img, .photos img, .carousel img, .restaurant-images img"
HOURS_ROWS = (".hours-table tr", ".opening-hours li", ".hours-list li")

CUISINE_SELECTOR = '.cuisine-type, .food-type, [itemprop="servesCuisine"], .cuisine-tags span'
CUISINE_META_SELECTOR = 'meta[name*="cuisine"], meta[property*="cuisine"]'
FEATURE_SELECTOR = ".amenities li, .features li, .highlights li, .restaurant-features li"

FEATURE_VOCABULARY = {
    "outdoor seating": ((".outdoor", ".patio", ".terrace"), ("outdoor seating", "patio", "terrace")),
    "wifi": ((".wifi", ".internet"), ("wifi", "wi-fi")),
    "parking": ((".parking",), ("parking",)),
    "reservations": ((".reservation", ".booking"), ("reservation", "reservations")),
    "takeaway": ((".takeaway", ".takeout"), ("takeaway", "takeout")),
    "delivery": ((".delivery",), ("delivery",)),
}


def extract_cuisine(soup: BeautifulSoup) -> list[str]:
    """Cuisine tags from tag elements plus comma-separated meta content."""
    cuisines: list[str] = []
    for el in soup.select(CUISINE_SELECTOR):
        value = clean_text(el.get("content") or el.get_text(" "))
        if value and len(value) < 30:
            cuisines.append(value)
    for meta in soup.select(CUISINE_META_SELECTOR):
        content = meta.get("content") or ""
        cuisines.extend(clean_text(part) for part in content.split(","))
    return unique(cuisines)


def extract_price(soup: BeautifulSoup) -> str | None:
    declared = soup.select_one('[itemprop="priceRange"]')
    if declared is not None:
        value = (declared.get("content") or declared.get_text()).strip()
        if value and set(value) == {"$"} and len(value) <= 4:
            return value
    return extract_price_range(container_text(soup, PRICE_CONTAINERS))


def extract_features(soup: BeautifulSoup) -> list[str]:
    features = list_items(soup, FEATURE_SELECTOR, limit=50)
    return unique(features + detect_keywords(soup, FEATURE_VOCABULARY))


def extract(soup: BeautifulSoup, url: str) -> RestaurantData:
    return RestaurantData(
        name=extract_name(soup, NAME_SELECTORS),
        address=optional_text(soup, ADDRESS_SELECTORS),
        phone=extract_phone(soup),
        website=extract_website(soup, url),
        description=optional_text(soup, DESCRIPTION_SELECTORS),
        rating=extract_rating(soup),
        images=extract_images(soup, IMAGE_SELECTOR, url),
        coordinates=extract_coordinates(soup, data_attributes=True),
        cuisine=extract_cuisine(soup),
        price_range=extract_price(soup),
        features=extract_features(soup),
        opening_hours=extract_opening_hours(soup, HOURS_ROWS),
    )
