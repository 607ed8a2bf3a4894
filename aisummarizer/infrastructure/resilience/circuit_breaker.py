"""Circuit breaker around single upstream HTTP attempts.

CLOSED: attempts pass through and consecutive failures are counted.
OPEN: attempts are rejected immediately, without a network call, until the
break duration has elapsed.
HALF_OPEN: exactly one trial attempt is let through; success closes the
circuit, failure opens it again.
"""

import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional, Tuple

from aisummarizer.domain.events.api_events import (
    CircuitClosed, CircuitHalfOpened, CircuitOpened, DomainEvent, EventListener, dispatch_event
)
from aisummarizer.infrastructure.resilience.api_retry import HttpOperation
from aisummarizer.infrastructure.resilience.http_result import HttpResult

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_THRESHOLD = 5
DEFAULT_BREAK_DURATION_SECONDS = 30.0

class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"

class CircuitBreaker:
    """Process-wide breaker; all transitions happen under a single lock."""

    def __init__(
        self,
        name: str = "huggingface",
        failure_threshold: int = DEFAULT_FAILURE_THRESHOLD,
        break_duration: float = DEFAULT_BREAK_DURATION_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        on_event: Optional[EventListener] = None,
    ):
        """Initializes the breaker.

        Args:
            name: Label used in logs and events.
            failure_threshold: Consecutive failures that trip the circuit.
            break_duration: Seconds the circuit stays open before a trial.
            clock: Monotonic clock.
            on_event: Optional observer for transition events.
        """
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1.")
        if break_duration < 0:
            raise ValueError("break_duration must not be negative.")
        self.name = name
        self.failure_threshold = failure_threshold
        self.break_duration = float(break_duration)
        self._clock = clock
        self._on_event = on_event
        self._lock = threading.Lock()
        self._state = CircuitState.CLOSED
        self._consecutive_failures = 0
        self._opened_at: Optional[float] = None
        self._trial_in_flight = False
        logger.info(f"CircuitBreaker '{name}' initialized: threshold={failure_threshold}, break={self.break_duration:g}s")

    @property
    def state(self) -> CircuitState:
        """Current state. Read-only; an elapsed break is reported as HALF_OPEN."""
        with self._lock:
            if self._state is CircuitState.OPEN and self._break_elapsed():
                return CircuitState.HALF_OPEN
            return self._state

    @property
    def consecutive_failures(self) -> int:
        with self._lock:
            return self._consecutive_failures

    def _break_elapsed(self) -> bool:
        return self._opened_at is not None and self._clock() - self._opened_at >= self.break_duration

    def _try_admit(self) -> Tuple[bool, bool, Optional[DomainEvent]]:
        """Decides whether an attempt may proceed.

        Returns:
            (admitted, is_trial, event_to_dispatch)
        """
        with self._lock:
            if self._state is CircuitState.CLOSED:
                return True, False, None
            if self._state is CircuitState.OPEN:
                if not self._break_elapsed():
                    return False, False, None
                self._state = CircuitState.HALF_OPEN
                self._trial_in_flight = True
                logger.warning(f"Circuit '{self.name}' HALF-OPEN. Testing connection...")
                return True, True, CircuitHalfOpened(name=self.name)
            # HALF_OPEN
            if self._trial_in_flight:
                return False, False, None
            self._trial_in_flight = True
            return True, True, None

    def _record(self, success: bool, is_trial: bool) -> Optional[DomainEvent]:
        with self._lock:
            if is_trial:
                self._trial_in_flight = False
            elif self._state is not CircuitState.CLOSED:
                # Admitted before the circuit opened; only the trial decides from here
                logger.debug(f"Circuit '{self.name}' ignoring late result from a call admitted while closed.")
                return None
            if success:
                previous = self._state
                self._state = CircuitState.CLOSED
                self._consecutive_failures = 0
                self._opened_at = None
                if previous is not CircuitState.CLOSED:
                    logger.info(f"Circuit '{self.name}' CLOSED. Normal operation resumed.")
                    return CircuitClosed(name=self.name)
                return None

            self._consecutive_failures += 1
            if self._state is CircuitState.HALF_OPEN or (
                self._state is CircuitState.CLOSED and self._consecutive_failures >= self.failure_threshold
            ):
                self._state = CircuitState.OPEN
                self._opened_at = self._clock()
                logger.warning(
                    f"Circuit '{self.name}' OPENED after {self._consecutive_failures} consecutive failures. "
                    f"Will retry after {self.break_duration:g}s."
                )
                return CircuitOpened(
                    name=self.name,
                    consecutive_failures=self._consecutive_failures,
                    break_seconds=self.break_duration,
                )
            return None

    def _abandon_trial(self, is_trial: bool) -> None:
        """A cancelled trial frees the half-open slot without counting as a failure."""
        if not is_trial:
            return
        with self._lock:
            self._trial_in_flight = False

    async def call(self, operation: HttpOperation) -> HttpResult:
        """Runs one attempt through the breaker.

        Returns:
            The attempt's HttpResult, or HttpResult.rejected() when the circuit
            is open (no network call is made).

        Raises:
            Whatever the operation raises; exceptions count as failures except
            cancellation, which is never counted.
        """
        admitted, is_trial, event = self._try_admit()
        if event is not None:
            dispatch_event(event, self._on_event)
        if not admitted:
            logger.debug(f"Circuit '{self.name}' is open; rejecting call without a network attempt.")
            return HttpResult.rejected()

        try:
            result = await operation()
        except Exception:
            event = self._record(success=False, is_trial=is_trial)
            if event is not None:
                dispatch_event(event, self._on_event)
            raise
        except BaseException:
            # asyncio.CancelledError and friends
            self._abandon_trial(is_trial)
            raise

        event = self._record(success=result.is_success, is_trial=is_trial)
        if event is not None:
            dispatch_event(event, self._on_event)
        return result

    def reset(self) -> None:
        """Forces the circuit closed (administrative use and tests)."""
        with self._lock:
            self._state = CircuitState.CLOSED
            self._consecutive_failures = 0
            self._opened_at = None
            self._trial_in_flight = False
