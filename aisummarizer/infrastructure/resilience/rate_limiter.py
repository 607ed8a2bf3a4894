"""Implementation of a rate limiter.

Controls the frequency of outgoing requests to stay inside the upstream
quota. Combines a sliding window of grant timestamps (at most N grants per
window, each slot held for one full window from acquisition) with a minimum
spacing of window / N between consecutive grants.
"""

import time
import asyncio
import logging
from collections import deque
from typing import Awaitable, Callable, Deque, Optional

from aisummarizer.domain.events.api_events import ApiCallDeferred, EventListener, dispatch_event

logger = logging.getLogger(__name__)

DEFAULT_REQUESTS_PER_MINUTE = 30
DEFAULT_TIME_WINDOW_SECONDS = 60.0

class RateLimiter:
    """Sliding window rate limiter with minimum inter-request spacing."""

    def __init__(
        self,
        requests_per_minute: int = DEFAULT_REQUESTS_PER_MINUTE,
        time_window: float = DEFAULT_TIME_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        on_event: Optional[EventListener] = None,
    ):
        """Initializes the rate limiter.

        Args:
            requests_per_minute: Maximum number of slots granted per time window.
            time_window: The time window in seconds (one minute by default).
            clock: Monotonic clock used for all timestamps.
            sleep: Awaitable sleep used while waiting for a slot.
            on_event: Optional observer for ApiCallDeferred events.

        Raises:
            ValueError: If requests_per_minute or time_window is not positive.
        """
        if requests_per_minute <= 0 or time_window <= 0:
            raise ValueError("Requests per minute and time window must be positive.")

        self.max_requests = requests_per_minute
        self.time_window = float(time_window)
        self.min_interval = self.time_window / requests_per_minute
        self._clock = clock
        self._sleep = sleep
        self._on_event = on_event
        # Rate window: grant timestamps plus the start time of the last grant
        self.timestamps: Deque[float] = deque()
        self.last_granted: Optional[float] = None
        self._lock = asyncio.Lock()
        logger.info(
            f"RateLimiter initialized: {requests_per_minute} requests / {self.time_window:g} seconds, "
            f"min spacing {self.min_interval:.2f}s"
        )

    def release(self) -> int:
        """Returns every slot whose hold window has elapsed to the pool.

        Returns:
            The number of slots released.
        """
        now = self._clock()
        released = 0
        while self.timestamps and now - self.timestamps[0] >= self.time_window:
            self.timestamps.popleft()
            released += 1
        return released

    def _wait_needed(self) -> float:
        """Seconds until the next grant is allowed. Caller must hold the lock."""
        self.release()
        now = self._clock()
        wait_time = 0.0
        if self.last_granted is not None:
            wait_time = max(wait_time, self.last_granted + self.min_interval - now)
        if len(self.timestamps) >= self.max_requests:
            wait_time = max(wait_time, self.timestamps[0] + self.time_window - now)
        return max(0.0, wait_time)

    async def acquire(self) -> None:
        """Waits until a slot is available and records the grant.

        Raises:
            asyncio.CancelledError: If the waiting task is cancelled. No slot is
                recorded in that case.
        """
        deferred = False
        while True:
            async with self._lock:
                wait_time = self._wait_needed()
                if wait_time <= 0:
                    now = self._clock()
                    self.timestamps.append(now)
                    self.last_granted = now
                    logger.debug(f"Rate limit permission granted ({len(self.timestamps)}/{self.max_requests} slots in use).")
                    return

            if not deferred:
                dispatch_event(ApiCallDeferred(wait_time_seconds=wait_time), self._on_event)
                deferred = True
            logger.debug(f"Rate limit reached. Waiting for {wait_time:.2f} seconds.")
            await self._sleep(wait_time)
            # Loop again to re-check under the lock; another task may have taken the slot

    async def get_wait_time(self) -> float:
        """Estimates the time needed before the next request can be made."""
        async with self._lock:
            return self._wait_needed()

    @property
    def slots_in_use(self) -> int:
        """Number of grants still inside the current window."""
        now = self._clock()
        return sum(1 for granted in self.timestamps if now - granted < self.time_window)

    async def __aenter__(self) -> "RateLimiter":
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        # Slots are held for a full window regardless of the call's outcome
        return None
