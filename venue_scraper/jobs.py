from __future__ import annotations

import asyncio
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, PrivateAttr, computed_field

from venue_scraper.exceptions.custom import InvalidJobError, UnknownCategoryError
from venue_scraper.extractors.fields import is_http_url
from venue_scraper.schemas.results import ScraperResult
from venue_scraper.schemas.venues import Category


class JobStatus(StrEnum):
    pending = "pending"
    running = "running"
    completed = "completed"
    paused = "paused"
    error = "error"


TERMINAL_STATUSES = (JobStatus.completed, JobStatus.error)


def _running_event() -> asyncio.Event:
    event = asyncio.Event()
    event.set()
    return event


class ScrapingJob(BaseModel):
    id: str
    category: Category
    urls: list[str]
    status: JobStatus = JobStatus.pending
    results: list[ScraperResult | None] = []  # one slot per URL, filled by index
    created_at: datetime
    start_time: datetime | None = None
    end_time: datetime | None = None
    error: str | None = None

    _resume: asyncio.Event = PrivateAttr(default_factory=_running_event)
    _cancelled: bool = PrivateAttr(default=False)

    def model_post_init(self, context: Any, /) -> None:
        if len(self.results) != len(self.urls):
            self.results = [None] * len(self.urls)

    @computed_field
    @property
    def completed(self) -> int:
        return sum(1 for r in self.results if r is not None)

    @computed_field
    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r is not None and r.success)

    @computed_field
    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r is not None and not r.success)

    @computed_field
    @property
    def progress(self) -> int:
        if not self.urls:
            return 0
        return self.completed * 100 // len(self.urls)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def record_result(self, index: int, result: ScraperResult) -> None:
        if self._cancelled:
            return
        self.results[index] = result

    def successful_results(self) -> list[ScraperResult]:
        return [r for r in self.results if r is not None and r.success]

    def cancel(self) -> None:
        self._cancelled = True
        self._resume.set()

    def hold(self) -> None:
        self._resume.clear()

    def release(self) -> None:
        self._resume.set()

    async def wait_if_paused(self) -> None:
        await self._resume.wait()


def validate_urls(urls: Sequence[str]) -> list[str]:
    cleaned = [url.strip() for url in urls]
    if not cleaned:
        raise InvalidJobError("At least one URL is required")
    invalid = [url for url in cleaned if not is_http_url(url)]
    if invalid:
        raise InvalidJobError(
            f"URLs must be absolute http(s) URLs: {', '.join(repr(u) for u in invalid[:5])}"
        )
    return cleaned


class JobStore:
    def __init__(self, max_jobs: int = 1000) -> None:
        self._jobs: dict[str, ScrapingJob] = {}
        self._max_jobs = max_jobs

    def _evict(self) -> None:
        if len(self._jobs) <= self._max_jobs:
            return
        # Remove oldest finished jobs first
        candidates = sorted(
            (j for j in self._jobs.values() if j.status in TERMINAL_STATUSES),
            key=lambda j: j.created_at,
        )
        while len(self._jobs) > self._max_jobs and candidates:
            self._jobs.pop(candidates.pop(0).id, None)

    def create_job(self, category: Category | str, urls: Sequence[str]) -> ScrapingJob:
        """Validate input and register a pending job. Raises before any network activity."""
        try:
            category = Category(category)
        except ValueError as exc:
            raise UnknownCategoryError(str(category)) from exc
        job = ScrapingJob(
            id=uuid.uuid4().hex[:12],
            category=category,
            urls=validate_urls(urls),
            created_at=datetime.now(timezone.utc),
        )
        self._jobs[job.id] = job
        self._evict()
        return job

    def get_job(self, job_id: str) -> ScrapingJob | None:
        return self._jobs.get(job_id)

    def list_jobs(self) -> list[ScrapingJob]:
        return sorted(self._jobs.values(), key=lambda j: j.created_at)

    def delete_job(self, job_id: str) -> bool:
        """Hide the job and stop it from dispatching more URLs. In-flight scrapes finish."""
        job = self._jobs.pop(job_id, None)
        if job is None:
            return False
        job.cancel()
        return True

    def mark_running(self, job_id: str) -> None:
        if job := self._jobs.get(job_id):
            job.start_time = datetime.now(timezone.utc)
            if job.status != JobStatus.paused:
                job.status = JobStatus.running

    def mark_paused(self, job_id: str) -> bool:
        job = self._jobs.get(job_id)
        if job is None or job.status not in (JobStatus.pending, JobStatus.running):
            return False
        job.status = JobStatus.paused
        job.hold()
        return True

    def mark_resumed(self, job_id: str) -> bool:
        job = self._jobs.get(job_id)
        if job is None or job.status != JobStatus.paused:
            return False
        job.status = JobStatus.running if job.start_time else JobStatus.pending
        job.release()
        return True

    def mark_completed(self, job_id: str) -> None:
        if job := self._jobs.get(job_id):
            job.status = JobStatus.completed
            job.end_time = datetime.now(timezone.utc)

    def mark_failed(self, job_id: str, error: str) -> None:
        if job := self._jobs.get(job_id):
            job.status = JobStatus.error
            job.error = error
            job.end_time = datetime.now(timezone.utc)
