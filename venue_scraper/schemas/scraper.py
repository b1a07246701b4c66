from __future__ import annotations

from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
]

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProxyConfig(BaseModel):
    model_config = ConfigDict(frozen=True, **_CAMEL)

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    username: str | None = None
    password: str | None = None

    @property
    def url(self) -> str:
        credentials = ""
        if self.username:
            credentials = quote(self.username, safe="")
            if self.password:
                credentials += ":" + quote(self.password, safe="")
            credentials += "@"
        return f"http://{credentials}{self.host}:{self.port}"


class ScraperConfig(BaseModel):
    """Per-scraper settings. Immutable once a scraper is built from it."""

    model_config = ConfigDict(frozen=True, **_CAMEL)

    max_retries: int = Field(default=3, ge=0)
    retry_delay_ms: int = Field(default=1000, ge=0, alias="retryDelay")
    requests_per_second: float = Field(default=2.0, gt=0)
    max_concurrency: int = Field(default=2, ge=1)
    timeout_ms: int = Field(default=30_000, gt=0, alias="timeout")
    dispatch_delay_ms: int = Field(default=0, ge=0, alias="dispatchDelay")
    max_body_bytes: int = Field(default=5 * 1024 * 1024, gt=0)
    user_agents: list[str] = Field(default_factory=lambda: list(DEFAULT_USER_AGENTS), min_length=1)
    proxy: ProxyConfig | None = None

    @property
    def min_interval(self) -> float:
        """Seconds between two request starts."""
        return 1.0 / self.requests_per_second

    @property
    def retry_delay(self) -> float:
        return self.retry_delay_ms / 1000

    @property
    def timeout(self) -> float:
        return self.timeout_ms / 1000

    @property
    def dispatch_delay(self) -> float:
        return self.dispatch_delay_ms / 1000

    def merge(self, overrides: ScraperConfigOverrides | None) -> ScraperConfig:
        """Return a new config where explicitly set override fields win."""
        if overrides is None:
            return self
        explicit = overrides.model_dump(exclude_unset=True, exclude_none=True)
        if not explicit:
            return self
        return ScraperConfig.model_validate({**self.model_dump(), **explicit})


class ScraperConfigOverrides(BaseModel):
    """Optional per-job configuration; unset fields keep the defaults."""

    model_config = _CAMEL

    max_retries: int | None = Field(default=None, ge=0)
    retry_delay_ms: int | None = Field(default=None, ge=0, alias="retryDelay")
    requests_per_second: float | None = Field(default=None, gt=0)
    max_concurrency: int | None = Field(default=None, ge=1)
    timeout_ms: int | None = Field(default=None, gt=0, alias="timeout")
    dispatch_delay_ms: int | None = Field(default=None, ge=0, alias="dispatchDelay")
    user_agents: list[str] | None = Field(default=None, min_length=1)
    proxy: ProxyConfig | None = None
