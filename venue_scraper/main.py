import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from venue_scraper.config import Settings
from venue_scraper.exceptions.custom import InvalidJobError, JobNotFoundError, UnknownCategoryError
from venue_scraper.exceptions.handlers import (
    invalid_job_error_handler,
    job_not_found_error_handler,
    unknown_category_error_handler,
)
from venue_scraper.jobs import JobStore
from venue_scraper.routers.scraping import router as scraping_router
from venue_scraper.services.scraping import ScrapingService


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    store = JobStore(max_jobs=settings.max_jobs)
    app.state.job_store = store
    app.state.scraping_service = ScrapingService.from_settings(store, settings)

    yield


app = FastAPI(title="Venue Scraper", lifespan=lifespan)

app.add_exception_handler(InvalidJobError, invalid_job_error_handler)
app.add_exception_handler(UnknownCategoryError, unknown_category_error_handler)
app.add_exception_handler(JobNotFoundError, job_not_found_error_handler)

app.include_router(scraping_router)
