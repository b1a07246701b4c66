"""Tests for the selector-then-regex field policy."""

import re

from bs4 import BeautifulSoup

from venue_scraper.extractors.policy import (
    attr_of,
    container_text,
    first_valid,
    non_empty,
    pattern_in,
    shorter_than,
    text_field,
    text_of,
)

_DURATION_RE = re.compile(r"(?:duration|takes)[:\s]+([^.]+)", re.IGNORECASE)


def _soup(body: str) -> BeautifulSoup:
    return BeautifulSoup(f"<html><body>{body}</body></html>", "html.parser")


def test_first_valid_returns_first_passing_step():
    soup = _soup('<p class="a">too long for this field</p><p class="b">short</p>')
    steps = [(text_of(".a"), shorter_than(10)), (text_of(".b"), shorter_than(10))]
    assert first_valid(soup, steps) == "short"


def test_first_valid_none_when_nothing_passes():
    soup = _soup("<p>nothing here</p>")
    assert first_valid(soup, [(text_of(".missing"), non_empty)]) is None


def test_shorter_than_rejects_empty():
    assert shorter_than(5)("") is False
    assert shorter_than(5)("abcd") is True
    assert shorter_than(5)("abcde") is False


def test_attr_of_reads_attribute():
    soup = _soup('<meta itemprop="servesCuisine" content=" Thai ">')
    assert attr_of('[itemprop="servesCuisine"]', "content")(soup) == "Thai"
    assert attr_of('[itemprop="servesCuisine"]', "missing")(soup) is None


def test_container_text_joins_all_matches():
    soup = _soup('<div class="a">one</div><div class="b">two</div><div class="a">three</div>')
    assert container_text(soup, [".a", ".b"]).split() == ["one", "two", "three"]


def test_pattern_in_uses_group():
    soup = _soup('<div class="description">The tour takes 3 hours. Bring water.</div>')
    matcher = pattern_in([".description"], _DURATION_RE, group=1)
    assert matcher(soup) == "3 hours"


def test_pattern_in_without_containers():
    assert pattern_in([], _DURATION_RE)(_soup("<p>Duration: 2 hours</p>")) is None


def test_text_field_prefers_selectors():
    soup = _soup(
        '<span class="duration">90 minutes</span>'
        '<div class="description">Duration: 2 hours.</div>'
    )
    value = text_field(
        soup, [".duration"], containers=[".description"], patterns=[_DURATION_RE], group=1
    )
    assert value == "90 minutes"


def test_text_field_falls_back_to_pattern():
    soup = _soup('<div class="description">Duration: 2 hours. Great views.</div>')
    value = text_field(
        soup, [".duration"], containers=[".description"], patterns=[_DURATION_RE], group=1
    )
    assert value == "2 hours"


def test_text_field_skips_values_over_limit():
    soup = _soup(f'<span class="duration">{"long " * 30}</span><span class="time-needed">1 hour</span>')
    assert text_field(soup, [".duration", ".time-needed"], limit=50) == "1 hour"
