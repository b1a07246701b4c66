import asyncio
import logging

from venue_scraper.jobs import ScrapingJob
from venue_scraper.scrapers.base import VenueScraper

logger = logging.getLogger(__name__)


class BatchRunner:
    """Drives a job's URLs through one scraper, bounded by the scraper's limiter.

    Results land in the job slot matching the URL's position. A failing URL never
    stops the batch; a deleted job stops dispatching and drops late results.
    """

    def __init__(self, dispatch_delay: float = 0.0):
        self.dispatch_delay = dispatch_delay

    async def _run_one(self, job: ScrapingJob, scraper: VenueScraper, index: int, url: str) -> None:
        try:
            result = await scraper.scrape(url)
        finally:
            scraper.limiter.release()
        job.record_result(index, result)
        logger.debug("Job %s: %d/%d done", job.id, job.completed, len(job.urls))

    async def run(self, job: ScrapingJob, scraper: VenueScraper) -> None:
        tasks: list[asyncio.Task] = []
        for index, url in enumerate(job.urls):
            await job.wait_if_paused()
            if job.cancelled:
                break
            await scraper.limiter.acquire()
            if job.cancelled:
                scraper.limiter.release()
                break
            tasks.append(asyncio.create_task(self._run_one(job, scraper, index, url)))
            if self.dispatch_delay and index < len(job.urls) - 1:
                await asyncio.sleep(self.dispatch_delay)

        if job.cancelled:
            logger.info("Job %s deleted after dispatching %d/%d URLs", job.id, len(tasks), len(job.urls))
        await asyncio.gather(*tasks)
