import re

from bs4 import BeautifulSoup

from venue_scraper.extractors.fields import (
    clean_text,
    extract_images,
    extract_phone,
    extract_rating,
    extract_website,
    list_items,
    unique,
)
from venue_scraper.extractors.location import extract_coordinates
from venue_scraper.extractors.policy import container_text, text_field
from venue_scraper.scrapers.base import extract_name, optional_text
from venue_scraper.schemas.venues import ActivityData, Difficulty

NAME_SELECTORS = ("h1.activity-name", "h1.tour-name", ".activity-title", "h1")
ADDRESS_SELECTORS = ('[itemprop="address"]', ".meeting-point", ".address", ".location")
DESCRIPTION_SELECTORS = (".activity-description", ".description", ".overview", ".about-activity")
IMAGE_SELECTOR = ".gallery img, .photos img, .activity-images img, .tour-images img"

SUMMARY_CONTAINERS = (".description", ".overview")
DETAIL_CONTAINERS = (".description", ".overview", ".details")
BOOKING_CONTAINERS = (".description", ".overview", ".booking-info")

DURATION_SELECTORS = (".duration", ".activity-duration", ".tour-duration", ".time-required")
DURATION_PATTERNS = (
    re.compile(r"(\d+(?:-\d+)?\s*(?:hours?|hrs?|days?|minutes?|mins?))\b", re.IGNORECASE),
    re.compile(r"(half\s+day|full\s+day|whole\s+day|multi-day)", re.IGNORECASE),
)
GROUP_SIZE_SELECTORS = (".group-size", ".max-participants", ".capacity", ".participants")
GROUP_SIZE_PATTERNS = (
    re.compile(r"(up to \d+ (?:people|persons|participants))", re.IGNORECASE),
    re.compile(r"(\d+(?:-\d+)? (?:people|persons|participants))", re.IGNORECASE),
    re.compile(r"(small group|large group|private group)", re.IGNORECASE),
)
AGE_SELECTORS = (".age-restriction", ".minimum-age", ".age-limit", ".age-requirement")
AGE_PATTERNS = (
    re.compile(r"(minimum age \d+)", re.IGNORECASE),
    re.compile(r"(ages? \d+\+?)", re.IGNORECASE),
    re.compile(r"(children under \d+)", re.IGNORECASE),
    re.compile(r"(all ages)", re.IGNORECASE),
    re.compile(r"(\d+ years and older)", re.IGNORECASE),
)
BEST_TIME_SELECTORS = (".best-time", ".recommended-time", ".optimal-time", ".season")
BEST_TIME_PATTERNS = (
    re.compile(r"best time[^.]*\.?", re.IGNORECASE),
    re.compile(r"recommended (?:time|season)[^.]*\.?", re.IGNORECASE),
    re.compile(r"(?:morning|afternoon|evening|sunset|sunrise)[^.]*\.?", re.IGNORECASE),
)

DIFFICULTY_SELECTORS = (".difficulty", ".activity-level", ".fitness-level", ".skill-level")
DIFFICULTY_LADDER = (
    (Difficulty.easy, ("easy", "beginner")),
    (Difficulty.moderate, ("moderate", "intermediate")),
    (Difficulty.challenging, ("challenging", "difficult", "advanced")),
    (Difficulty.expert, ("expert", "extreme")),
)
_DIFFICULTY_RES = tuple(
    (level, re.compile(r"\b(?:" + "|".join(words) + r")s?\b", re.IGNORECASE))
    for level, words in DIFFICULTY_LADDER
)

INCLUDED_SELECTOR = ".included li, .whats-included li, .package-includes li"
INCLUSIONS_SELECTOR = ".inclusions li, .inclusions p, .includes li, .includes p"
REQUIREMENTS_SELECTOR = ".requirements li, .what-to-bring li, .bring-items li"
REQUIREMENT_PATTERNS = (
    re.compile(r"(?:bring|required?|need|must have)[^.]*(?:shoes|clothing|equipment|gear)[^.]*", re.IGNORECASE),
    re.compile(r"(?:comfortable|suitable)[^.]*(?:clothing|shoes|footwear)[^.]*", re.IGNORECASE),
)


def classify_difficulty(text: str | None) -> Difficulty | None:
    """First ladder tier (easiest first) with a keyword in ``text``."""
    if not text:
        return None
    for level, pattern in _DIFFICULTY_RES:
        if pattern.search(text):
            return level
    return None


def extract_difficulty(soup: BeautifulSoup) -> Difficulty | None:
    for selector in DIFFICULTY_SELECTORS:
        el = soup.select_one(selector)
        if el is not None and (level := classify_difficulty(el.get_text(" "))):
            return level
    return classify_difficulty(container_text(soup, SUMMARY_CONTAINERS))


def extract_included(soup: BeautifulSoup) -> list[str]:
    included = list_items(soup, INCLUDED_SELECTOR, limit=100)
    included += [
        item for item in list_items(soup, INCLUSIONS_SELECTOR, limit=100)
        if "not included" not in item.lower()
    ]
    return unique(included)


def extract_requirements(soup: BeautifulSoup) -> list[str]:
    requirements = list_items(soup, REQUIREMENTS_SELECTOR, limit=100)
    content = container_text(soup, BOOKING_CONTAINERS)
    for pattern in REQUIREMENT_PATTERNS:
        for match in pattern.finditer(content):
            cleaned = clean_text(match.group(0))
            if len(cleaned) < 100:
                requirements.append(cleaned)
    return unique(requirements)


def extract(soup: BeautifulSoup, url: str) -> ActivityData:
    return ActivityData(
        name=extract_name(soup, NAME_SELECTORS),
        address=optional_text(soup, ADDRESS_SELECTORS),
        phone=extract_phone(soup),
        website=extract_website(soup, url),
        description=optional_text(soup, DESCRIPTION_SELECTORS),
        rating=extract_rating(soup),
        images=extract_images(soup, IMAGE_SELECTOR, url),
        coordinates=extract_coordinates(soup),
        duration=text_field(
            soup, DURATION_SELECTORS, limit=50,
            containers=DETAIL_CONTAINERS, patterns=DURATION_PATTERNS, group=1,
        ),
        group_size=text_field(
            soup, GROUP_SIZE_SELECTORS, limit=50,
            containers=BOOKING_CONTAINERS, patterns=GROUP_SIZE_PATTERNS, group=1,
        ),
        difficulty=extract_difficulty(soup),
        age_restriction=text_field(
            soup, AGE_SELECTORS, limit=50,
            containers=BOOKING_CONTAINERS, patterns=AGE_PATTERNS, group=1,
        ),
        included=extract_included(soup),
        requirements=extract_requirements(soup),
        best_time=text_field(
            soup, BEST_TIME_SELECTORS, limit=100,
            containers=SUMMARY_CONTAINERS, patterns=BEST_TIME_PATTERNS,
        ),
    )
