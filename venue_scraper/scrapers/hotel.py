import re

from bs4 import BeautifulSoup, Tag

from venue_scraper.extractors.fields import (
    clean_text,
    extract_images,
    extract_phone,
    extract_rating,
    extract_website,
    first_text,
    list_items,
    parse_price,
    unique,
)
from venue_scraper.extractors.keywords import detect_keywords
from venue_scraper.extractors.location import extract_coordinates
from venue_scraper.extractors.policy import container_text
from venue_scraper.scrapers.base import extract_name, optional_text
from venue_scraper.schemas.venues import HotelData, RoomType

NAME_SELECTORS = ("h1.hotel-name", "h1.property-name", ".hotel-title", "h1")
ADDRESS_SELECTORS = ('[itemprop="address"]', ".address", ".hotel-address")
DESCRIPTION_SELECTORS = (".hotel-description", ".description", ".overview", ".about-hotel")
POLICY_SELECTORS = (".cancellation-policy", ".booking-policy", ".policy")
POLICY_CONTAINERS = (".policy", ".check-in-policy", ".hotel-policy")
IMAGE_SELECTOR = ".gallery img, .photos img, .hotel-images img, .room-images img"

STAR_SELECTORS = (".star-rating", ".hotel-stars", '[itemprop="starRating"]', ".stars")
ROOM_SELECTOR = ".room-type, .accommodation-type, .room-card"
ROOM_NAME_SELECTORS = (".room-name", ".type-name", "h3", "h4")
ROOM_PRICE_SELECTORS = (".price", ".rate", ".cost")
ROOM_AMENITY_SELECTOR = ".amenities li, .features li, .room-features li"
AMENITY_SELECTOR = ".amenities li, .facilities li, .hotel-amenities li, .services li"

AMENITY_VOCABULARY = {
    "WiFi": ((".wifi", ".internet"), ("wifi", "wi-fi")),
    "Pool": ((".pool", ".swimming"), ("pool", "swimming pool")),
    "Gym": ((".gym", ".fitness"), ("gym", "fitness centre", "fitness center")),
    "Spa": ((".spa", ".wellness"), ("spa",)),
    "Restaurant": ((".restaurant", ".dining"), ("restaurant",)),
    "Bar": ((".bar", ".lounge"), ("bar",)),
    "Parking": ((".parking",), ("parking",)),
    "Room Service": ((), ("room service",)),
    "Concierge": ((), ("concierge",)),
    "Business Center": ((), ("business center", "business centre")),
}

_STAR_TEXT_RE = re.compile(r"(?<![\d.])(\d)\s*-?\s*stars?", re.IGNORECASE)
_CLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})\s*([AP]M)?", re.IGNORECASE)
_CHECK_PATTERNS = {
    "checkin": re.compile(r"check.?in.*?(\d{1,2}:\d{2}(?:\s*[AP]M)?)", re.IGNORECASE),
    "checkout": re.compile(r"check.?out.*?(\d{1,2}:\d{2}(?:\s*[AP]M)?)", re.IGNORECASE),
}


def _stars(value: int) -> int | None:
    return value if 1 <= value <= 5 else None


def _star_rating_of(el: Tag) -> int | None:
    match = _STAR_TEXT_RE.search(el.get_text(" "))
    if match and (stars := _stars(int(match.group(1)))):
        return stars
    if stars := _stars(len(el.select(".star, .fa-star"))):
        return stars
    for attribute in ("data-stars", "data-rating"):
        raw = el.get(attribute)
        if raw:
            try:
                stars = _stars(int(float(raw)))
            except ValueError:
                continue
            if stars:
                return stars
    return None


def extract_star_rating(soup: BeautifulSoup) -> int | None:
    """Star rating from "N star" text, star icon count, then data attributes."""
    for selector in STAR_SELECTORS:
        el = soup.select_one(selector)
        if el is not None and (stars := _star_rating_of(el)):
            return stars
    return None


def extract_room_types(soup: BeautifulSoup) -> list[RoomType]:
    rooms: list[RoomType] = []
    for card in soup.select(ROOM_SELECTOR):
        room_type = first_text(card, ROOM_NAME_SELECTORS)
        price = parse_price(first_text(card, ROOM_PRICE_SELECTORS))
        if not room_type or not price or price <= 0:
            continue
        rooms.append(
            RoomType(
                type=room_type,
                price=price,
                amenities=list_items(card, ROOM_AMENITY_SELECTOR, limit=100),
            )
        )
    return rooms


def extract_amenities(soup: BeautifulSoup) -> list[str]:
    amenities = list_items(soup, AMENITY_SELECTOR, limit=50)
    return unique(amenities + detect_keywords(soup, AMENITY_VOCABULARY))


def to_hhmm(text: str) -> str | None:
    """Normalize "2:00 PM" / "14:00" style times to 24-hour "HH:MM"."""
    match = _CLOCK_RE.search(text)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    meridiem = (match.group(3) or "").upper()
    if meridiem:
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12 + (12 if meridiem == "PM" else 0)
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"


def extract_check_time(soup: BeautifulSoup, kind: str) -> str | None:
    """``kind`` is "checkin" or "checkout"."""
    short = "in" if kind == "checkin" else "out"
    prop = soup.select_one(f'[itemprop="{kind}Time"]')
    if prop is not None and prop.get("content") and (time := to_hhmm(prop["content"])):
        return time

    for selector in (f".{kind}", f".{kind}-time", f'[itemprop="{kind}Time"]', f".check-{short}"):
        el = soup.select_one(selector)
        if el is not None and (time := to_hhmm(el.get_text(" "))):
            return time

    match = _CHECK_PATTERNS[kind].search(clean_text(container_text(soup, POLICY_CONTAINERS)))
    return to_hhmm(match.group(1)) if match else None


def extract(soup: BeautifulSoup, url: str) -> HotelData:
    return HotelData(
        name=extract_name(soup, NAME_SELECTORS),
        address=optional_text(soup, ADDRESS_SELECTORS),
        phone=extract_phone(soup),
        website=extract_website(soup, url),
        description=optional_text(soup, DESCRIPTION_SELECTORS),
        rating=extract_rating(soup),
        images=extract_images(soup, IMAGE_SELECTOR, url),
        coordinates=extract_coordinates(soup),
        star_rating=extract_star_rating(soup),
        room_types=extract_room_types(soup),
        amenities=extract_amenities(soup),
        check_in=extract_check_time(soup, "checkin"),
        check_out=extract_check_time(soup, "checkout"),
        cancellation_policy=optional_text(soup, POLICY_SELECTORS),
    )
