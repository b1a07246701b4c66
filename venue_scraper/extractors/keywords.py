import re
from collections.abc import Mapping, Sequence

from bs4 import BeautifulSoup, NavigableString

from venue_scraper.extractors.fields import clean_text

_INVISIBLE = ("script", "style", "noscript", "template")

# label -> (class selectors, phrases)
Vocabulary = Mapping[str, tuple[Sequence[str], Sequence[str]]]


def page_text(soup: BeautifulSoup) -> str:
    """Visible text of the whole page, whitespace-collapsed."""
    parts = (
        s for s in soup.find_all(string=True)
        if type(s) is NavigableString and s.parent is not None and s.parent.name not in _INVISIBLE
    )
    return clean_text(" ".join(parts))


def _phrase_re(phrase: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(phrase)}(?:e?s)?\b", re.IGNORECASE)


def detect_keywords(soup: BeautifulSoup, vocabulary: Vocabulary, text: str | None = None) -> list[str]:
    """Labels whose selectors match or whose phrases (or plurals) appear as whole words."""
    if text is None:
        text = page_text(soup)
    found: list[str] = []
    for label, (selectors, phrases) in vocabulary.items():
        if selectors and soup.select_one(", ".join(selectors)) is not None:
            found.append(label)
        elif any(_phrase_re(phrase).search(text) for phrase in phrases):
            found.append(label)
    return found
