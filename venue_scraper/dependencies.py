from typing import Annotated

from fastapi import Depends, Request

from venue_scraper.jobs import JobStore
from venue_scraper.services.scraping import ScrapingService


def get_job_store(request: Request) -> JobStore:
    return request.app.state.job_store


def get_scraping_service(request: Request) -> ScrapingService:
    return request.app.state.scraping_service


JobStoreDep = Annotated[JobStore, Depends(get_job_store)]
ScrapingDep = Annotated[ScrapingService, Depends(get_scraping_service)]
