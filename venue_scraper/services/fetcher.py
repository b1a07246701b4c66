import logging
import random

import httpx

from venue_scraper.exceptions.custom import FetchError
from venue_scraper.schemas.scraper import ScraperConfig
from venue_scraper.services.retry import RetryPolicy
from venue_scraper.services.throttle import RateLimiter

logger = logging.getLogger(__name__)

_BASE_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-ZA,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
    "Cache-Control": "no-cache",
}
_HTML_TYPES = ("text/html", "application/xhtml+xml")


def build_client(config: ScraperConfig) -> httpx.AsyncClient:
    """Create the HTTP client owned by one scraping job."""
    return httpx.AsyncClient(
        timeout=config.timeout,
        proxy=config.proxy.url if config.proxy else None,
        follow_redirects=True,
    )


class HtmlFetcher:
    def __init__(
        self,
        client: httpx.AsyncClient,
        config: ScraperConfig,
        limiter: RateLimiter | None = None,
        retry: RetryPolicy | None = None,
    ):
        self._client = client
        self._config = config
        self.limiter = limiter or RateLimiter(config.requests_per_second)
        self.retry = retry or RetryPolicy(config.max_retries, config.retry_delay)

    def _headers(self) -> dict[str, str]:
        return {**_BASE_HEADERS, "User-Agent": random.choice(self._config.user_agents)}

    async def _get(self, url: str) -> httpx.Response:
        await self.limiter.acquire()
        resp = await self._client.get(
            url,
            headers=self._headers(),
            timeout=self._config.timeout,
            follow_redirects=True,
        )
        resp.raise_for_status()
        return resp

    async def fetch_html(self, url: str) -> str:
        """GET ``url`` and return its markup. Raises FetchError on any failure."""
        try:
            resp = await self.retry.call(lambda: self._get(url))
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("HTTP %d fetching %s", status, url)
            raise FetchError(f"HTTP {status} fetching {url}", url, status_code=status) from exc
        except httpx.TimeoutException as exc:
            logger.error("Timed out fetching %s", url)
            raise FetchError(f"Timed out fetching {url}", url) from exc
        except httpx.HTTPError as exc:
            logger.error("Error fetching %s: %s", url, exc)
            raise FetchError(f"{type(exc).__name__} fetching {url}: {exc}", url) from exc

        content_type = resp.headers.get("content-type", "")
        if not any(t in content_type for t in _HTML_TYPES):
            logger.error("Non-HTML response from %s (content-type: %s)", url, content_type)
            raise FetchError(
                f"Unsupported content type {content_type or 'unknown'} at {url}",
                url,
                status_code=resp.status_code,
            )

        if len(resp.content) > self._config.max_body_bytes:
            logger.error("Oversized page %s (%d bytes)", url, len(resp.content))
            raise FetchError(
                f"Response from {url} exceeds {self._config.max_body_bytes} bytes",
                url,
                status_code=resp.status_code,
            )

        return resp.text
