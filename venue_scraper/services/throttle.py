import asyncio
import time


class RateLimiter:
    """Strict inter-request spacing for one scraper instance.

    Not a token bucket: every ``acquire()`` waits until ``1 / requests_per_second``
    seconds have passed since the previous ``acquire()`` returned.
    """

    def __init__(self, requests_per_second: float):
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        self.min_interval = 1.0 / requests_per_second
        self.request_count = 0
        self._last_request: float | None = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            if self._last_request is not None:
                wait_time = self.min_interval - (time.monotonic() - self._last_request)
                if wait_time > 0:
                    await asyncio.sleep(wait_time)
            self._last_request = time.monotonic()
            self.request_count += 1
