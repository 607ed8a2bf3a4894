"""Domain models for the summarization use case.

Includes the upstream request value object, the result tagged union
(success or failure, never both), the API status snapshot and the
classification produced from raw upstream responses.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from .common import SummaryText, UserMessage

# --- Error Taxonomy ---

class ErrorKind(str, Enum):
    """Classification of a failed summarization."""
    VALIDATION = "validation"
    EXTRACTION = "extraction"
    COLD_START = "cold_start"
    THROTTLED = "throttled"
    TIMEOUT = "timeout"
    AUTH = "auth"
    FORBIDDEN = "forbidden"
    UPSTREAM_ERROR = "upstream_error"
    UNAVAILABLE = "unavailable"
    EMPTY_RESPONSE = "empty_response"
    CIRCUIT_OPEN = "circuit_open"
    TRANSPORT = "transport"
    UNEXPECTED = "unexpected"

# --- Upstream Request ---

@dataclass(frozen=True)
class SummarizationRequest:
    """Immutable request sent to the upstream summarization model."""
    inputs: str
    max_length: int
    min_length: int
    do_sample: bool = False
    temperature: float = 0.3
    wait_for_model: bool = True
    use_cache: bool = False

    def to_payload(self) -> Dict[str, Any]:
        """Serializes the request into the JSON body expected upstream."""
        return {
            "inputs": self.inputs,
            "parameters": {
                "max_length": self.max_length,
                "min_length": self.min_length,
                "do_sample": self.do_sample,
                "temperature": self.temperature,
            },
            "options": {
                "wait_for_model": self.wait_for_model,
                "use_cache": self.use_cache,
            },
        }

# --- Result Tagged Union ---

@dataclass(frozen=True)
class SummarySuccess:
    """A summary was produced.

    Article metadata is set only for summaries of extracted web articles.
    """
    summary: SummaryText
    processing_time: float = 0.0 # Seconds
    title: Optional[str] = None
    author: Optional[str] = None
    source_length: Optional[int] = None # Characters of article text analysed

    @property
    def ok(self) -> bool:
        return True

@dataclass(frozen=True)
class SummaryFailure:
    """No summary was produced; carries the classification and a user-facing message."""
    error_kind: ErrorKind
    message: UserMessage
    status_code: int = 0 # 0 means no upstream response was received

    @property
    def ok(self) -> bool:
        return False

SummarizationResult = Union[SummarySuccess, SummaryFailure]

# --- Classification ---

@dataclass(frozen=True)
class ClassifiedResult:
    """Interpretation of one upstream response."""
    success: bool
    status_code: int
    summary_text: Optional[SummaryText] = None
    error_kind: Optional[ErrorKind] = None
    user_message: Optional[UserMessage] = None
    estimated_time: Optional[float] = None # Seconds until a loading model is ready

    def to_result(self, processing_time: float = 0.0) -> SummarizationResult:
        """Maps the classification onto the public result union."""
        if self.success and self.summary_text is not None:
            return SummarySuccess(summary=self.summary_text, processing_time=processing_time)
        return SummaryFailure(
            error_kind=self.error_kind or ErrorKind.UNEXPECTED,
            message=self.user_message or UserMessage("The summarization service encountered an error. Please try again."),
            status_code=self.status_code,
        )

# --- API Status ---

class ApiAvailability(str, Enum):
    AVAILABLE = "available"
    LOADING = "loading"
    UNAVAILABLE = "unavailable"

@dataclass(frozen=True)
class ApiStatus:
    """Point-in-time snapshot of upstream availability. Never cached."""
    availability: ApiAvailability
    status_code: int
    message: str
    estimated_wait_seconds: Optional[float] = None

    @property
    def is_available(self) -> bool:
        return self.availability is ApiAvailability.AVAILABLE

    @property
    def is_loading(self) -> bool:
        return self.availability is ApiAvailability.LOADING
