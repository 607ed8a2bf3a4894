"""Outcome of a single upstream HTTP attempt.

The resilience layer passes these values around instead of raising for
expected failures: a response with any status, a transport failure, or a
synthetic rejection produced by an open circuit breaker.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


@dataclass(frozen=True)
class HttpResult:
    status_code: int = 0
    body: str = ""
    error: Optional[Exception] = None
    circuit_open: bool = False

    @classmethod
    def from_response(cls, response: httpx.Response) -> "HttpResult":
        return cls(status_code=response.status_code, body=response.text)

    @classmethod
    def from_exception(cls, error: Exception) -> "HttpResult":
        return cls(error=error)

    @classmethod
    def rejected(cls) -> "HttpResult":
        """Result returned by an open circuit without touching the network."""
        return cls(circuit_open=True)

    @property
    def is_success(self) -> bool:
        return self.error is None and not self.circuit_open and 200 <= self.status_code < 300

    @property
    def is_transport_error(self) -> bool:
        return isinstance(self.error, httpx.TransportError)

    @property
    def is_timeout(self) -> bool:
        return isinstance(self.error, httpx.TimeoutException)

    @property
    def is_retryable(self) -> bool:
        if self.circuit_open:
            return False
        if self.error is not None:
            return self.is_transport_error
        return self.status_code in RETRYABLE_STATUS_CODES

    def describe(self) -> str:
        """Short description for logs (never shown to users)."""
        if self.circuit_open:
            return "circuit open"
        if self.error is not None:
            return f"{type(self.error).__name__}: {self.error}"
        return f"HTTP {self.status_code}"
