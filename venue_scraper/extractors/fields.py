"""Field extraction primitives shared by every category scraper.

Every function here treats "not found" as a normal outcome and returns
``None`` (or an empty list). Values that are found but fail validation are
dropped the same way.
"""

import logging
import re
from collections.abc import Iterable
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_NUMBER_RE = re.compile(r"^\s*(\d+(?:[.,]\d+)?)")
# Thousands separated by "," or a space, optional cents.
AMOUNT = r"(?:\d{1,3}(?:[ ,]\d{3})+(?!\d)|\d+)(?:\.\d{2})?"
_PRICE_RE = re.compile(rf"(?:R|ZAR)?\s*({AMOUNT})")

_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".gif")
_MIN_PHONE_DIGITS = 10

PHONE_SELECTORS = (
    'a[href^="tel:"]',
    ".phone-number",
    ".contact-phone",
    '[itemprop="telephone"]',
    ".phone",
    ".tel",
)

WEBSITE_SELECTORS = (
    'a[href*="website"]',
    'a:-soup-contains("Website")',
    ".website-link",
    ".official-website",
    '[itemprop="url"]',
)

RATING_SELECTORS = (
    ".rating-value",
    ".star-rating",
    '[itemprop="ratingValue"]',
    ".score",
    ".rating",
)

# A whole Rand amount: not followed by more digits or another thousands group.
_AMOUNT_END = r"(?!\d|[ ,]\d{3}(?!\d))"
_RAND = r"(?<![A-Za-z])(?:R|ZAR)\s?"

# Ordered cheapest first; the first band that matches wins.
PRICE_BANDS = (
    ("$", re.compile(_RAND + r"[1-9]\d?" + _AMOUNT_END)),
    ("$$", re.compile(_RAND + r"[1-9]\d{2}" + _AMOUNT_END)),
    ("$$$", re.compile(_RAND + r"[1-9][ ,]?\d{3}" + _AMOUNT_END)),
    ("$$$$", re.compile(_RAND + r"[1-9]\d{0,2}(?:[ ,]?\d{3})+(?!\d)")),
)


def clean_text(text: str | None) -> str:
    """Collapse whitespace runs (newlines included) to one space and trim."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def unique(values: Iterable[str]) -> list[str]:
    """Drop empty and repeated values, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


def list_items(soup: BeautifulSoup | Tag, selector: str, limit: int = 50) -> list[str]:
    """Cleaned text of every element matching ``selector`` shorter than ``limit``."""
    items = (clean_text(el.get_text(" ")) for el in soup.select(selector))
    return unique(item for item in items if len(item) < limit)


def is_http_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_valid_image_url(url: str) -> bool:
    if not is_http_url(url):
        return False
    return urlparse(url).path.lower().endswith(_IMAGE_EXTENSIONS)


def extract_images(soup: BeautifulSoup, selector: str, base_url: str) -> list[str]:
    """Image URLs from ``src``/``data-src`` of matching elements, resolved and deduplicated."""
    images: list[str] = []
    for el in soup.select(selector):
        src = (el.get("src") or el.get("data-src") or "").strip()
        if not src:
            continue
        src = urljoin(base_url, src)
        if is_valid_image_url(src):
            images.append(src)
    return unique(images)


def normalize_phone(raw: str | None) -> str | None:
    """Digits of a phone number, with SA national ``0...`` rewritten to ``27...``.

    Returns None for fewer than 10 digits.
    """
    if not raw:
        return None
    raw = raw.strip()
    if raw.lower().startswith("tel:"):
        raw = raw[4:]
    digits = "".join(c for c in raw if c.isdigit())
    if len(digits) < _MIN_PHONE_DIGITS:
        return None
    if digits.startswith("0"):
        digits = "27" + digits[1:]
    return digits


def extract_phone(soup: BeautifulSoup) -> str | None:
    for selector in PHONE_SELECTORS:
        el = soup.select_one(selector)
        if el is None:
            continue
        raw = el.get("href") or el.get("content") or el.get_text()
        phone = normalize_phone(raw)
        if phone:
            return phone
        logger.debug("Rejected phone candidate %r from %s", raw, selector)
    return None


def extract_website(soup: BeautifulSoup, current_url: str) -> str | None:
    for selector in WEBSITE_SELECTORS:
        el = soup.select_one(selector)
        if el is None:
            continue
        href = (el.get("href") or el.get("content") or "").strip()
        if not href or href == current_url:
            continue
        resolved = urljoin(current_url, href)
        if resolved == current_url or not is_http_url(resolved):
            continue
        return resolved
    return None


def parse_rating(text: str | None) -> float | None:
    if not text:
        return None
    match = _LEADING_NUMBER_RE.match(text)
    if not match:
        return None
    value = float(match.group(1).replace(",", "."))
    return value if 0 <= value <= 5 else None


def extract_rating(soup: BeautifulSoup) -> float | None:
    for selector in RATING_SELECTORS:
        el = soup.select_one(selector)
        if el is None:
            continue
        rating = parse_rating(el.get("content") or el.get_text())
        if rating is not None:
            return rating
    return None


def extract_price_range(text: str | None) -> str | None:
    """Map Rand amounts in ``text`` to a "$".."$$$$" band."""
    if not text:
        return None
    for band, pattern in PRICE_BANDS:
        if pattern.search(text):
            return band
    return None


def to_amount(raw: str) -> float:
    """Amount text such as "1 250.00" or "1,250.00" as a float."""
    return float(raw.replace(",", "").replace(" ", ""))


def parse_price(text: str | None) -> float | None:
    """First amount in ``text`` as a float, e.g. "R1 250.00" -> 1250.0."""
    if not text:
        return None
    match = _PRICE_RE.search(text)
    if not match:
        return None
    return to_amount(match.group(1))


def first_text(el: BeautifulSoup | Tag, selectors: Iterable[str]) -> str:
    """Cleaned text of the first selector (in priority order) with a non-empty match."""
    for selector in selectors:
        found = el.select_one(selector)
        if found is not None and (text := clean_text(found.get_text(" "))):
            return text
    return ""
