import httpx
import pytest
from httpx import ASGITransport

from venue_scraper.schemas.scraper import ScraperConfig


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("SCRAPER_REQUESTS_PER_SECOND", "1000")
    monkeypatch.setenv("SCRAPER_RETRY_DELAY_MS", "0")
    monkeypatch.setenv("SCRAPER_MAX_RETRIES", "1")
    monkeypatch.setenv("SCRAPER_MAX_CONCURRENCY", "2")


@pytest.fixture
def fast_config():
    """No meaningful pacing or backoff, so tests run quickly."""
    return ScraperConfig(requests_per_second=1000, retry_delay_ms=0, max_retries=2)


@pytest.fixture
async def client(mock_env):
    from venue_scraper.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c
