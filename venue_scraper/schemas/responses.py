from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from venue_scraper.schemas.results import ScraperResult
from venue_scraper.schemas.scraper import ScraperConfigOverrides
from venue_scraper.schemas.venues import Category


class ScrapeRequest(BaseModel):
    category: Category
    urls: list[str]
    config: ScraperConfigOverrides | None = None


class JobSubmittedResponse(BaseModel):
    job_id: str
    status: str
    message: str


class JobSummary(BaseModel):
    job_id: str
    category: Category
    status: str
    progress: int
    total: int
    succeeded: int
    failed: int
    created_at: datetime
    start_time: datetime | None = None
    end_time: datetime | None = None


class JobStatusResponse(JobSummary):
    urls: list[str]
    results: list[ScraperResult | None]
    error: str | None = None
