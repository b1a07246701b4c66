import re
from collections.abc import Sequence

from bs4 import BeautifulSoup

from venue_scraper.extractors.fields import clean_text

WEEK = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
_SCHEMA_DAYS = {"mo": 0, "tu": 1, "we": 2, "th": 3, "fr": 4, "sa": 5, "su": 6}

_DAY = (
    r"(?:mon(?:day)?|tue(?:s(?:day)?)?|wed(?:nesday)?|thu(?:r(?:s(?:day)?)?)?"
    r"|fri(?:day)?|sat(?:urday)?|sun(?:day)?)"
)
_DAY_RE = re.compile(rf"\b{_DAY}\b", re.IGNORECASE)
_DAY_RANGE_RE = re.compile(rf"\b({_DAY})\s*(?:-|–|to)\s*({_DAY})\b", re.IGNORECASE)
_TIME_RE = re.compile(
    r"\d{1,2}:\d{2}\s*[AP]M\s*[-–]\s*\d{1,2}:\d{2}\s*[AP]M"
    r"|\d{1,2}:\d{2}\s*[-–]\s*\d{1,2}:\d{2}"
    r"|closed",
    re.IGNORECASE,
)

_SCHEMA_DAY = r"(?:Mo|Tu|We|Th|Fr|Sa|Su)"
_SCHEMA_SPEC = rf"{_SCHEMA_DAY}(?:-{_SCHEMA_DAY})?"
_SCHEMA_RE = re.compile(
    rf"({_SCHEMA_SPEC}(?:\s*,\s*{_SCHEMA_SPEC})*)\s+(\d{{1,2}}:\d{{2}}-\d{{1,2}}:\d{{2}})"
)


def _day_index(token: str) -> int:
    return WEEK.index(next(day for day in WEEK if day.startswith(token[:3].lower())))


def expand_days(start: int, end: int) -> list[str]:
    """Day names from ``start`` to ``end`` inclusive, wrapping past Sunday."""
    span = (end - start) % 7
    return [WEEK[(start + offset) % 7] for offset in range(span + 1)]


def _in_week_order(hours: dict[str, str]) -> dict[str, str]:
    return {day: hours[day] for day in WEEK if day in hours}


def parse_hours_row(text: str) -> dict[str, str]:
    """Hours from one row of text where day names and a time range co-occur."""
    text = clean_text(text)
    time_match = _TIME_RE.search(text)
    if not time_match:
        return {}
    value = clean_text(time_match.group(0))
    if value.lower() == "closed":
        value = "Closed"

    range_match = _DAY_RANGE_RE.search(text)
    if range_match:
        days = expand_days(_day_index(range_match.group(1)), _day_index(range_match.group(2)))
    else:
        days = [WEEK[_day_index(m.group(0))] for m in _DAY_RE.finditer(text)]
    return {day: value for day in days}


def parse_hours_rows(soup: BeautifulSoup, selectors: Sequence[str]) -> dict[str, str]:
    hours: dict[str, str] = {}
    for row in soup.select(", ".join(selectors)):
        hours.update(parse_hours_row(row.get_text(" ")))
    return hours


def parse_schema_spec(spec: str) -> dict[str, str]:
    """Parse schema.org ``openingHours`` text such as ``"Mo-Fr 09:00-17:00, Sa 10:00-14:00"``."""
    hours: dict[str, str] = {}
    for days_part, time_range in _SCHEMA_RE.findall(spec):
        for token in re.split(r"\s*,\s*", days_part):
            if "-" in token:
                start, end = token.split("-")
                days = expand_days(_SCHEMA_DAYS[start.lower()], _SCHEMA_DAYS[end.lower()])
            else:
                days = [WEEK[_SCHEMA_DAYS[token.lower()]]]
            for day in days:
                hours[day] = time_range
    return hours


def parse_schema_hours(soup: BeautifulSoup) -> dict[str, str]:
    hours: dict[str, str] = {}
    for el in soup.select('[itemprop="openingHours"]'):
        spec = el.get("content") or el.get_text(" ")
        hours.update(parse_schema_spec(spec))
    return hours


def extract_opening_hours(
    soup: BeautifulSoup,
    selectors: Sequence[str],
    include_schema: bool = True,
) -> dict[str, str] | None:
    """Day -> time range from hours rows, overlaid with schema.org markup."""
    hours = parse_hours_rows(soup, selectors)
    if include_schema:
        hours.update(parse_schema_hours(soup))
    return _in_week_order(hours) or None
