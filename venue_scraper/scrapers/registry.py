import httpx

from venue_scraper.exceptions.custom import UnknownCategoryError
from venue_scraper.schemas.scraper import ScraperConfig
from venue_scraper.schemas.venues import Category
from venue_scraper.scrapers import activity, attraction, hotel, restaurant
from venue_scraper.scrapers.base import Extractor, VenueScraper
from venue_scraper.services.fetcher import HtmlFetcher

EXTRACTORS: dict[Category, Extractor] = {
    Category.restaurant: restaurant.extract,
    Category.hotel: hotel.extract,
    Category.attraction: attraction.extract,
    Category.activity: activity.extract,
}


def create_scraper(
    category: Category | str,
    client: httpx.AsyncClient,
    config: ScraperConfig,
) -> VenueScraper:
    """Build a scraper with its own rate limiter, retry policy and concurrency cap."""
    try:
        extractor = EXTRACTORS[Category(category)]
    except ValueError as exc:
        raise UnknownCategoryError(str(category)) from exc
    return VenueScraper(HtmlFetcher(client, config), extractor, config.max_concurrency)
