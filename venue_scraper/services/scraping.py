import logging
from collections.abc import Sequence

from venue_scraper.config import Settings
from venue_scraper.jobs import JobStore, ScrapingJob
from venue_scraper.schemas.results import ScraperResult
from venue_scraper.schemas.scraper import ScraperConfig, ScraperConfigOverrides
from venue_scraper.schemas.venues import Category
from venue_scraper.scrapers.registry import create_scraper
from venue_scraper.services.batch import BatchRunner
from venue_scraper.services.fetcher import build_client

logger = logging.getLogger(__name__)


class ScrapingService:
    def __init__(self, store: JobStore, defaults: ScraperConfig):
        self._store = store
        self._defaults = defaults

    @classmethod
    def from_settings(cls, store: JobStore, settings: Settings) -> "ScrapingService":
        return cls(store, settings.scraper_config())

    def config_for(self, overrides: ScraperConfigOverrides | None = None) -> ScraperConfig:
        return self._defaults.merge(overrides)

    async def run_job(self, job: ScrapingJob, overrides: ScraperConfigOverrides | None = None) -> None:
        """Run a job to completion. Per-URL failures still end in ``completed``."""
        self._store.mark_running(job.id)
        logger.info("Job %s started: %d %s URLs", job.id, len(job.urls), job.category)
        try:
            config = self.config_for(overrides)
            async with build_client(config) as client:
                scraper = create_scraper(job.category, client, config)
                await BatchRunner(config.dispatch_delay).run(job, scraper)
        except Exception as exc:
            logger.exception("Job %s failed", job.id)
            self._store.mark_failed(job.id, str(exc))
            return

        if job.cancelled:
            return
        self._store.mark_completed(job.id)
        logger.info(
            "Job %s completed: %d succeeded, %d failed",
            job.id, job.succeeded, job.failed,
        )

    async def scrape_sync(
        self,
        category: Category,
        urls: Sequence[str],
        overrides: ScraperConfigOverrides | None = None,
    ) -> list[ScraperResult]:
        config = self.config_for(overrides)
        async with build_client(config) as client:
            scraper = create_scraper(category, client, config)
            return await scraper.scrape_list(urls)
