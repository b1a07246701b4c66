from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, model_validator

from venue_scraper.schemas.venues import VenueData


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ScraperResult(BaseModel):
    success: bool
    data: VenueData | None = None
    error: str | None = None
    url: str
    timestamp: datetime = Field(default_factory=_now)

    @model_validator(mode="after")
    def _check_branch(self) -> ScraperResult:
        if self.success and (self.data is None or self.error is not None):
            raise ValueError("successful result needs data and no error")
        if not self.success and (self.error is None or self.data is not None):
            raise ValueError("failed result needs an error and no data")
        return self

    @classmethod
    def succeeded(cls, url: str, data: VenueData) -> ScraperResult:
        return cls(success=True, data=data, url=url)

    @classmethod
    def failed(cls, url: str, error: str) -> ScraperResult:
        return cls(success=False, error=error or "Unknown error", url=url)
