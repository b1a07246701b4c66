"""Two-tier field policy: structured selectors first, then regex over free text.

A field is described as an ordered sequence of ``(matcher, validator)`` steps.
The first matcher whose output passes its validator provides the value.
"""

import re
from collections.abc import Callable, Iterable, Sequence

from bs4 import BeautifulSoup

from venue_scraper.extractors.fields import clean_text

Matcher = Callable[[BeautifulSoup], str | None]
Validator = Callable[[str], bool]
Step = tuple[Matcher, Validator]


def non_empty(value: str) -> bool:
    return bool(value)


def shorter_than(limit: int) -> Validator:
    def validate(value: str) -> bool:
        return bool(value) and len(value) < limit

    return validate


def text_of(selector: str) -> Matcher:
    """Cleaned text of the first element matching ``selector``."""

    def match(soup: BeautifulSoup) -> str | None:
        el = soup.select_one(selector)
        return clean_text(el.get_text(" ")) if el is not None else None

    return match


def attr_of(selector: str, attribute: str) -> Matcher:
    def match(soup: BeautifulSoup) -> str | None:
        el = soup.select_one(selector)
        if el is None:
            return None
        value = el.get(attribute)
        return clean_text(value) if isinstance(value, str) else None

    return match


def container_text(soup: BeautifulSoup, selectors: Iterable[str]) -> str:
    """Joined text of every element matching any of ``selectors``, in document order."""
    return " ".join(el.get_text(" ") for el in soup.select(", ".join(selectors)))


def pattern_in(containers: Sequence[str], pattern: re.Pattern[str], group: int = 0) -> Matcher:
    """Regex search over the text of the broader ``containers``."""

    def match(soup: BeautifulSoup) -> str | None:
        if not containers:
            return None
        found = pattern.search(container_text(soup, containers))
        return clean_text(found.group(group)) if found else None

    return match


def first_valid(soup: BeautifulSoup, steps: Iterable[Step]) -> str | None:
    for matcher, validator in steps:
        value = matcher(soup)
        if value and validator(value):
            return value
    return None


def text_field(
    soup: BeautifulSoup,
    selectors: Sequence[str],
    limit: int = 100,
    containers: Sequence[str] = (),
    patterns: Sequence[re.Pattern[str]] = (),
    group: int = 0,
) -> str | None:
    """Resolve a free-text field: each selector in priority order, then each pattern."""
    steps: list[Step] = [(text_of(selector), shorter_than(limit)) for selector in selectors]
    steps += [(pattern_in(containers, pattern, group), shorter_than(limit)) for pattern in patterns]
    return first_valid(soup, steps)
