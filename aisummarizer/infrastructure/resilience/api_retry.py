"""Service for executing upstream HTTP attempts with automatic retries.

Implements exponential backoff for transient failures: throttling (429),
temporary server issues (500, 502, 503, 504) and transport-level errors
such as connection failures or timeouts. Anything else is returned to the
caller on the first attempt.
"""

import logging
import asyncio
from typing import Awaitable, Callable, Optional

import httpx

from aisummarizer.domain.events.api_events import EventListener, RetryScheduled, dispatch_event
from aisummarizer.infrastructure.resilience.http_result import HttpResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY_MS = 1000

HttpOperation = Callable[[], Awaitable[HttpResult]]

class RetryExecutor:
    """Runs an HTTP operation up to max_attempts times with exponential backoff."""

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay_ms: int = DEFAULT_BASE_DELAY_MS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        on_event: Optional[EventListener] = None,
    ):
        """Initializes the RetryExecutor.

        Args:
            max_attempts: Hard ceiling on the number of attempts (including the first).
            base_delay_ms: Delay before the second attempt; doubled for each later one.
            sleep: Awaitable sleep used for backoff (cancellable).
            on_event: Optional observer for RetryScheduled events.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        if base_delay_ms < 0:
            raise ValueError("base_delay_ms must not be negative.")
        self.max_attempts = max_attempts
        self.base_delay_ms = base_delay_ms
        self._sleep = sleep
        self._on_event = on_event
        logger.info(f"RetryExecutor initialized: max_attempts={max_attempts}, base_delay={base_delay_ms}ms")

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after the given 1-indexed attempt failed."""
        return self.base_delay_ms * (2 ** (attempt - 1)) / 1000.0

    async def execute_with_retry(self, operation: HttpOperation) -> HttpResult:
        """Executes the operation, retrying retryable outcomes.

        Transport errors raised by the operation are converted into an
        HttpResult. Other exceptions (including cancellation) propagate.

        Returns:
            The first non-retryable result, or the last result once all
            attempts are used up.
        """
        result = HttpResult()
        for attempt in range(1, self.max_attempts + 1):
            try:
                result = await operation()
            except httpx.TransportError as e:
                result = HttpResult.from_exception(e)

            if not result.is_retryable:
                return result

            if attempt == self.max_attempts:
                logger.error(f"Max attempts ({self.max_attempts}) reached. Last outcome: {result.describe()}")
                return result

            delay = self.backoff_delay(attempt)
            logger.warning(
                f"Attempt {attempt}/{self.max_attempts} failed with {result.describe()}. "
                f"Waiting {delay:.2f}s..."
            )
            dispatch_event(
                RetryScheduled(
                    attempt_number=attempt,
                    max_attempts=self.max_attempts,
                    delay_seconds=delay,
                    reason=result.describe(),
                ),
                self._on_event,
            )
            await self._sleep(delay)

        return result
