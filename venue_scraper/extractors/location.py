import logging
import re

from bs4 import BeautifulSoup
from pydantic import ValidationError

from venue_scraper.schemas.venues import Coordinates

logger = logging.getLogger(__name__)

_MAP_LINK_SELECTOR = 'a[href*="maps.google"], a[href*="google.com/maps"]'
_AT_LAT_LNG_RE = re.compile(r"@(-?\d+\.\d+),(-?\d+\.\d+)")


def _coordinates(lat: str | None, lng: str | None) -> Coordinates | None:
    if not lat or not lng:
        return None
    try:
        return Coordinates(lat=float(lat), lng=float(lng))
    except (ValueError, ValidationError):
        logger.debug("Discarded invalid coordinates %s,%s", lat, lng)
        return None


def _from_map_link(soup: BeautifulSoup) -> Coordinates | None:
    link = soup.select_one(_MAP_LINK_SELECTOR)
    if link is None:
        return None
    match = _AT_LAT_LNG_RE.search(link.get("href", ""))
    return _coordinates(match.group(1), match.group(2)) if match else None


def _itemprop_value(soup: BeautifulSoup, prop: str) -> str | None:
    el = soup.select_one(f'[itemprop="{prop}"]')
    if el is None:
        return None
    return (el.get("content") or el.get_text()).strip() or None


def _from_schema(soup: BeautifulSoup) -> Coordinates | None:
    return _coordinates(_itemprop_value(soup, "latitude"), _itemprop_value(soup, "longitude"))


def _from_data_attributes(soup: BeautifulSoup) -> Coordinates | None:
    lat = soup.select_one("[data-lat]")
    lng = soup.select_one("[data-lng]")
    if lat is None or lng is None:
        return None
    return _coordinates(lat.get("data-lat"), lng.get("data-lng"))


def extract_coordinates(soup: BeautifulSoup, data_attributes: bool = False) -> Coordinates | None:
    """Coordinates from a Google Maps link, then schema.org, then optionally data-lat/lng."""
    sources = [_from_map_link, _from_schema]
    if data_attributes:
        sources.append(_from_data_attributes)
    for source in sources:
        coords = source(soup)
        if coords is not None:
            return coords
    return None
