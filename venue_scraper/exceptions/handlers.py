import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import InvalidJobError, JobNotFoundError, UnknownCategoryError

logger = logging.getLogger(__name__)


async def invalid_job_error_handler(_request: Request, exc: InvalidJobError) -> JSONResponse:
    logger.warning("Rejected scraping job: %s", exc.message)
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message},
    )


async def unknown_category_error_handler(
    _request: Request, exc: UnknownCategoryError
) -> JSONResponse:
    logger.warning("Unknown category requested: %s", exc.category)
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc)},
    )


async def job_not_found_error_handler(_request: Request, exc: JobNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"detail": "Job not found"},
    )
