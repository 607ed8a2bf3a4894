"""Domain Events related to upstream API calls and resilience.

Examples include events for when calls are deferred by the rate limiter,
retried, fail or succeed, and for circuit breaker state transitions.
"""

from dataclasses import dataclass, field
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Base Event Class
@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass

EventListener = Callable[[DomainEvent], None]

# --- API Call Events ---

@dataclass
class ApiCallInitiated(DomainEvent):
    """Event triggered when an upstream call is about to be made."""
    provider: str
    endpoint: str
    timestamp: float = field(default_factory=time.time)

@dataclass
class ApiCallSucceeded(DomainEvent):
    """Event triggered when an upstream call produced a summary."""
    provider: str
    endpoint: str
    latency_ms: float
    timestamp: float = field(default_factory=time.time)

@dataclass
class ApiCallFailed(DomainEvent):
    """Event triggered when an upstream call fails definitively (after retries)."""
    provider: str
    endpoint: str
    error_type: str
    status_code: int = 0
    timestamp: float = field(default_factory=time.time)

@dataclass
class ApiCallDeferred(DomainEvent):
    """Event triggered when a call is held back by the rate limiter."""
    wait_time_seconds: float
    timestamp: float = field(default_factory=time.time)

@dataclass
class RetryScheduled(DomainEvent):
    """Event triggered when a retry is scheduled for a failed attempt."""
    attempt_number: int
    max_attempts: int
    delay_seconds: float
    reason: str
    timestamp: float = field(default_factory=time.time)

# --- Circuit Breaker Events ---

@dataclass
class CircuitOpened(DomainEvent):
    """The breaker tripped and will reject calls for break_seconds."""
    name: str
    consecutive_failures: int
    break_seconds: float
    timestamp: float = field(default_factory=time.time)

@dataclass
class CircuitHalfOpened(DomainEvent):
    """The break elapsed; one trial call is being let through."""
    name: str
    timestamp: float = field(default_factory=time.time)

@dataclass
class CircuitClosed(DomainEvent):
    """A trial call succeeded; normal operation resumed."""
    name: str
    timestamp: float = field(default_factory=time.time)

# --- Dispatch ---

def dispatch_event(event: DomainEvent, listener: Optional[EventListener] = None) -> None:
    """Logs an event and hands it to the listener, if any.

    Listener failures are logged and swallowed so an observer never
    changes the outcome of the call that emitted the event.
    """
    logger.debug(f"EVENT: {event}")
    if listener is None:
        return
    try:
        listener(event)
    except Exception as e:
        logger.error(f"Event listener failed for {type(event).__name__}: {e}", exc_info=True)
