import asyncio
import logging

from fastapi import APIRouter, HTTPException, Response

from venue_scraper.dependencies import JobStoreDep, ScrapingDep
from venue_scraper.exceptions.custom import JobNotFoundError
from venue_scraper.jobs import JobStore, ScrapingJob, validate_urls
from venue_scraper.schemas.responses import (
    JobStatusResponse,
    JobSubmittedResponse,
    JobSummary,
    ScrapeRequest,
)
from venue_scraper.schemas.results import ScraperResult

logger = logging.getLogger(__name__)

router = APIRouter()

# Strong references so background jobs are not garbage collected mid-run
_background_tasks: set[asyncio.Task] = set()


def _summary(job: ScrapingJob) -> dict:
    return {
        "job_id": job.id,
        "category": job.category,
        "status": job.status,
        "progress": job.progress,
        "total": len(job.urls),
        "succeeded": job.succeeded,
        "failed": job.failed,
        "created_at": job.created_at,
        "start_time": job.start_time,
        "end_time": job.end_time,
    }


def _require_job(store: JobStore, job_id: str) -> ScrapingJob:
    job = store.get_job(job_id)
    if job is None:
        raise JobNotFoundError(job_id)
    return job


@router.post("/scrape", response_model=JobSubmittedResponse, status_code=202)
async def submit_scrape(
    request: ScrapeRequest,
    service: ScrapingDep,
    store: JobStoreDep,
) -> JobSubmittedResponse:
    job = store.create_job(request.category, request.urls)
    task = asyncio.create_task(service.run_job(job, request.config))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    logger.info("Submitted job %s (%d URLs)", job.id, len(job.urls))
    return JobSubmittedResponse(
        job_id=job.id,
        status=job.status,
        message="Scraping job submitted",
    )


@router.post("/scrape/sync", response_model=list[ScraperResult])
async def scrape_sync(request: ScrapeRequest, service: ScrapingDep) -> list[ScraperResult]:
    urls = validate_urls(request.urls)
    return await service.scrape_sync(request.category, urls, request.config)


@router.get("/jobs", response_model=list[JobSummary])
async def list_jobs(store: JobStoreDep) -> list[JobSummary]:
    return [JobSummary(**_summary(job)) for job in store.list_jobs()]


@router.get("/jobs/{job_id}", response_model=JobStatusResponse)
async def get_job_status(job_id: str, store: JobStoreDep) -> JobStatusResponse:
    job = _require_job(store, job_id)
    return JobStatusResponse(
        **_summary(job),
        urls=job.urls,
        results=job.results,
        error=job.error,
    )


@router.get("/jobs/{job_id}/results", response_model=list[ScraperResult])
async def get_job_results(job_id: str, store: JobStoreDep) -> list[ScraperResult]:
    """Successful results only, for export."""
    return _require_job(store, job_id).successful_results()


@router.post("/jobs/{job_id}/pause", response_model=JobSummary)
async def pause_job(job_id: str, store: JobStoreDep) -> JobSummary:
    job = _require_job(store, job_id)
    if not store.mark_paused(job_id):
        raise HTTPException(status_code=409, detail=f"Job is {job.status}, cannot pause")
    return JobSummary(**_summary(job))


@router.post("/jobs/{job_id}/resume", response_model=JobSummary)
async def resume_job(job_id: str, store: JobStoreDep) -> JobSummary:
    job = _require_job(store, job_id)
    if not store.mark_resumed(job_id):
        raise HTTPException(status_code=409, detail=f"Job is {job.status}, cannot resume")
    return JobSummary(**_summary(job))


@router.delete("/jobs/{job_id}", status_code=204)
async def delete_job(job_id: str, store: JobStoreDep) -> Response:
    if not store.delete_job(job_id):
        raise JobNotFoundError(job_id)
    return Response(status_code=204)
