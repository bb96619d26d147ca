# ABOUTME: Per-provider rate-limit gate with adaptive widening after rate-limit responses.
# ABOUTME: One asyncio.Lock serializes request starts; the wait blocks the task, not the loop.

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class RateLimitGate:
    """Minimum-interval gate shared by every request a provider makes.

    State (last_request_time, consecutive_rate_limits) is instance-scoped and
    only touched while holding the gate's lock. The effective interval grows
    with consecutive rate-limit hits, so a provider that keeps getting
    throttled backs off across calls, not just inside one retry loop:

        interval = min_interval * (1 + consecutive_rate_limits)

    Clock and sleep are injectable so tests can run on a fake timeline.
    """

    def __init__(
        self,
        min_interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_interval < 0:
            msg = f"min_interval must be non-negative, got {min_interval}"
            raise ValueError(msg)
        self._min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_request_time: float | None = None
        self._consecutive_rate_limits = 0

    @property
    def min_interval(self) -> float:
        return self._min_interval

    @property
    def consecutive_rate_limits(self) -> int:
        return self._consecutive_rate_limits

    @property
    def last_request_time(self) -> float | None:
        return self._last_request_time

    @property
    def current_interval(self) -> float:
        """Interval the next request must respect."""
        return self._min_interval * (1 + self._consecutive_rate_limits)

    async def wait(self) -> None:
        """Block the calling task until the next request may start, then stamp it.

        Cancelling the task while it waits releases the lock and leaves the
        timestamp untouched.
        """
        async with self._lock:
            if self._last_request_time is not None:
                interval = self.current_interval
                elapsed = self._clock() - self._last_request_time
                if elapsed < interval:
                    delay = interval - elapsed
                    logger.debug("Rate limit delay %.2fs", delay)
                    await self._sleep(delay)
            self._last_request_time = self._clock()

    async def record_rate_limited(self) -> int:
        """Count a rate-limit response; returns the new consecutive count."""
        async with self._lock:
            self._consecutive_rate_limits += 1
            return self._consecutive_rate_limits

    async def record_success(self) -> None:
        """Reset adaptive throttling after any non-rate-limited response."""
        async with self._lock:
            self._consecutive_rate_limits = 0
