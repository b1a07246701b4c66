import re

from bs4 import BeautifulSoup

from venue_scraper.extractors.fields import (
    AMOUNT,
    clean_text,
    extract_images,
    extract_phone,
    extract_rating,
    extract_website,
    first_text,
    list_items,
    parse_price,
    to_amount,
    unique,
)
from venue_scraper.extractors.hours import extract_opening_hours
from venue_scraper.extractors.keywords import detect_keywords, page_text
from venue_scraper.extractors.location import extract_coordinates
from venue_scraper.extractors.policy import text_field
from venue_scraper.scrapers.base import extract_name, optional_text
from venue_scraper.schemas.venues import AttractionData, TicketPrice

NAME_SELECTORS = ("h1.attraction-name", "h1.site-name", ".attraction-title", "h1")
ADDRESS_SELECTORS = ('[itemprop="address"]', ".address", ".location")
DESCRIPTION_SELECTORS = (".attraction-description", ".description", ".overview", ".about")
IMAGE_SELECTOR = ".gallery img, .photos img, .attraction-images img, .slideshow img"
HOURS_ROWS = (".opening-hours li", ".hours-table tr", ".operating-hours li")

TICKET_ROW_SELECTOR = ".ticket-price, .admission-price, .price-table tr"
TICKET_TYPE_SELECTORS = (".ticket-type", ".price-type", "td:first-child")
TICKET_PRICE_SELECTORS = (".price", ".cost", ".amount", "td:last-child")
TICKET_DESCRIPTION_SELECTORS = (".description", ".details")
TICKET_LIST_SELECTOR = ".pricing li, .admission-fees li"
_LABELLED_PRICE_RE = re.compile(rf"(.+?):\s*(?:R|ZAR)?\s*({AMOUNT})")

BEST_TIME_SELECTORS = (".best-time", ".recommended-time", ".visit-time", ".optimal-time")
BEST_TIME_PATTERNS = (
    re.compile(r"best time to visit[^.]*\.?", re.IGNORECASE),
    re.compile(r"recommended time[^.]*\.?", re.IGNORECASE),
    re.compile(r"visit during[^.]*\.?", re.IGNORECASE),
)
DURATION_SELECTORS = (".duration", ".visit-duration", ".time-needed", ".estimated-time")
DURATION_PATTERNS = (
    re.compile(r"(\d+(?:-\d+)?\s*(?:hours?|hrs?|minutes?|mins?))\b", re.IGNORECASE),
    re.compile(r"(half\s+day|full\s+day|whole\s+day)", re.IGNORECASE),
)
SUMMARY_CONTAINERS = (".description", ".overview")
DETAIL_CONTAINERS = (".description", ".overview", ".details")

ACCESSIBILITY_SELECTOR = ".accessibility li, .access-features li, .disabled-access li"
ACCESSIBILITY_VOCABULARY = {
    "Wheelchair Accessible": ((".wheelchair", ".disabled-access"), ("wheelchair",)),
    "Audio Guides": ((), ("audio guide", "audio guides")),
    "Braille Signage": ((), ("braille",)),
    "Accessible Parking": ((), ("accessible parking",)),
    "Elevator Access": ((), ("elevator", "lift")),
}
FACILITY_SELECTOR = ".facilities li, .amenities li, .services li"
FACILITY_VOCABULARY = {
    "Gift Shop": ((".gift-shop", ".souvenir"), ("gift shop",)),
    "Cafe": ((".cafe", ".restaurant"), ("cafe", "café")),
    "Restrooms": ((".restroom", ".toilet"), ("restroom", "restrooms", "toilets")),
    "Parking": ((".parking",), ("parking",)),
    "Information Center": ((), ("information center", "information centre")),
    "Guided Tours": ((), ("guided tour", "guided tours")),
}


def extract_ticket_prices(soup: BeautifulSoup) -> list[TicketPrice]:
    """Ticket prices from price-table rows and "Label: R120" list items, merged."""
    prices: list[TicketPrice] = []
    seen: set[tuple[str, float]] = set()

    def add(ticket_type: str, price: float | None, description: str | None = None) -> None:
        if not ticket_type or not price or price <= 0 or (ticket_type, price) in seen:
            return
        seen.add((ticket_type, price))
        prices.append(TicketPrice(type=ticket_type, price=price, description=description or None))

    for row in soup.select(TICKET_ROW_SELECTOR):
        add(
            first_text(row, TICKET_TYPE_SELECTORS),
            parse_price(first_text(row, TICKET_PRICE_SELECTORS)),
            first_text(row, TICKET_DESCRIPTION_SELECTORS),
        )

    for item in soup.select(TICKET_LIST_SELECTOR):
        match = _LABELLED_PRICE_RE.search(clean_text(item.get_text(" ")))
        if match:
            add(clean_text(match.group(1)), to_amount(match.group(2)))

    return prices


def extract(soup: BeautifulSoup, url: str) -> AttractionData:
    text = page_text(soup)
    return AttractionData(
        name=extract_name(soup, NAME_SELECTORS),
        address=optional_text(soup, ADDRESS_SELECTORS),
        phone=extract_phone(soup),
        website=extract_website(soup, url),
        description=optional_text(soup, DESCRIPTION_SELECTORS),
        rating=extract_rating(soup),
        images=extract_images(soup, IMAGE_SELECTOR, url),
        coordinates=extract_coordinates(soup),
        ticket_prices=extract_ticket_prices(soup),
        opening_hours=extract_opening_hours(soup, HOURS_ROWS),
        best_time_to_visit=text_field(
            soup, BEST_TIME_SELECTORS, limit=100,
            containers=SUMMARY_CONTAINERS, patterns=BEST_TIME_PATTERNS,
        ),
        duration=text_field(
            soup, DURATION_SELECTORS, limit=50,
            containers=DETAIL_CONTAINERS, patterns=DURATION_PATTERNS, group=1,
        ),
        accessibility=unique(
            list_items(soup, ACCESSIBILITY_SELECTOR, limit=50)
            + detect_keywords(soup, ACCESSIBILITY_VOCABULARY, text)
        ),
        facilities=unique(
            list_items(soup, FACILITY_SELECTOR, limit=50)
            + detect_keywords(soup, FACILITY_VOCABULARY, text)
        ),
    )
