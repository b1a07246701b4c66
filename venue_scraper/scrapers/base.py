import asyncio
import logging
from collections.abc import Callable, Sequence

from bs4 import BeautifulSoup

from venue_scraper.extractors.fields import clean_text, is_http_url
from venue_scraper.extractors.policy import first_valid, non_empty, text_of
from venue_scraper.schemas.results import ScraperResult
from venue_scraper.schemas.venues import ScrapedData
from venue_scraper.services.fetcher import HtmlFetcher

logger = logging.getLogger(__name__)

Extractor = Callable[[BeautifulSoup, str], ScrapedData]


def extract_name(soup: BeautifulSoup, selectors: Sequence[str]) -> str:
    """Heading text by selector priority, falling back to og:title and <title>."""
    name = first_valid(soup, [(text_of(selector), non_empty) for selector in selectors])
    if name:
        return name
    og_title = soup.find("meta", property="og:title")
    if og_title and og_title.get("content"):
        return clean_text(og_title["content"])
    if soup.title and soup.title.string:
        return clean_text(soup.title.string)
    return ""


def optional_text(soup: BeautifulSoup, selectors: Sequence[str]) -> str | None:
    """First non-empty cleaned text among ``selectors``, unbounded in length."""
    return first_valid(soup, [(text_of(selector), non_empty) for selector in selectors])


class VenueScraper:
    """Fetches one page per URL and turns it into a ScraperResult.

    Category behaviour lives entirely in ``extractor``; pacing and retries in
    ``fetcher``. ``limiter`` bounds how many scrapes run at once.
    """

    def __init__(self, fetcher: HtmlFetcher, extractor: Extractor, max_concurrency: int = 2):
        self._fetcher = fetcher
        self._extract = extractor
        self.limiter = asyncio.Semaphore(max_concurrency)

    async def scrape(self, url: str) -> ScraperResult:
        """Scrape a single page. Never raises: failures become failed results."""
        if not is_http_url(url):
            logger.warning("Refusing to scrape non-http URL %s", url)
            return ScraperResult.failed(url, f"Invalid URL: {url!r}")
        try:
            html = await self._fetcher.fetch_html(url)
            soup = BeautifulSoup(html, "html.parser")
            data = self._extract(soup, url)
        except Exception as exc:
            logger.warning("Scrape failed for %s: %s", url, exc)
            return ScraperResult.failed(url, str(exc) or type(exc).__name__)

        logger.debug("Scraped %s (%s)", url, data.name)
        return ScraperResult.succeeded(url, data)

    async def _scrape_bounded(self, url: str) -> ScraperResult:
        async with self.limiter:
            return await self.scrape(url)

    async def scrape_list(self, urls: Sequence[str]) -> list[ScraperResult]:
        """Scrape all ``urls`` concurrently; output order matches input order."""
        return list(await asyncio.gather(*(self._scrape_bounded(url) for url in urls)))
