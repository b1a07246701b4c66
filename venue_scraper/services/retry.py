import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE", "TRACE"})
MAX_BACKOFF = 30.0


def is_retryable(exc: BaseException) -> bool:
    """Network errors, 429 and idempotent 5xx responses are worth another attempt."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status == 429:
            return True
        return status >= 500 and exc.request.method.upper() in IDEMPOTENT_METHODS
    return isinstance(exc, httpx.TransportError)


class RetryPolicy:
    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.max_retries = max_retries
        self.base_delay = base_delay
        self._sleep = sleep

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def _retrying(self) -> AsyncRetrying:
        # base * 2^(n-1), capped, plus up to 20% of base as jitter
        wait = wait_exponential(multiplier=self.base_delay, max=MAX_BACKOFF) + wait_random(
            0, self.base_delay / 5
        )
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait,
            retry=retry_if_exception(is_retryable),
            reraise=True,
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )

    async def call(self, fn: Callable[[], Awaitable[T]]) -> T:
        """Run ``fn`` until it succeeds, fails terminally, or attempts run out."""
        return await self._retrying()(fn)
