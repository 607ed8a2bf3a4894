"""Interprets Hugging Face Inference API responses.

The endpoint answers with two different shapes: a list of
``{"summary_text": ...}`` objects on success, or an object
``{"error": ..., "estimated_time": ...}`` on failure. Responses are matched
against the success shape first, then the error shape, and finally mapped by
status code alone. Upstream error text is used for classification only and is
never passed through to the user.
"""

import json
import logging
from typing import Any, Optional, Tuple

from aisummarizer.domain.models.common import SummaryText, UserMessage
from aisummarizer.domain.models.summarization import (
    ApiAvailability, ApiStatus, ClassifiedResult, ErrorKind
)
from aisummarizer.infrastructure.resilience.http_result import HttpResult

logger = logging.getLogger(__name__)

# --- User-facing Messages ---
MSG_EMPTY_SUMMARY = UserMessage("Unable to generate summary. Please try again.")
MSG_COLD_START = UserMessage("The AI model is warming up. Please try again in a few moments.")
MSG_THROTTLED = UserMessage("Too many requests. Please wait a moment before trying again.")
MSG_TIMEOUT = UserMessage("The request took too long to process. Please try with shorter content.")
MSG_AUTH = UserMessage("Authentication failed. Please check the API configuration.")
MSG_UPSTREAM_ERROR = UserMessage("The summarization service encountered an error. Please try again.")
MSG_CIRCUIT_OPEN = UserMessage("The summarization service is temporarily unavailable. Please try again shortly.")
MSG_TRANSPORT = UserMessage("Could not reach the summarization service. Please try again later.")

# Fallbacks when the body cannot be parsed
STATUS_FALLBACKS = {
    401: (ErrorKind.AUTH, UserMessage("Invalid API token. Please check your Hugging Face authentication.")),
    403: (ErrorKind.FORBIDDEN, UserMessage("Access forbidden. Please verify your API token permissions.")),
    429: (ErrorKind.THROTTLED, UserMessage("Rate limit exceeded. Please wait before making another request.")),
    503: (ErrorKind.COLD_START, UserMessage("Model is currently loading. Please try again in a few moments.")),
}

def _parse_json(body: str) -> Optional[Any]:
    if not body or not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None

def _extract_summary(payload: Any) -> Optional[str]:
    """Success shape: [{"summary_text": "..."}]."""
    if not isinstance(payload, list) or not payload:
        return None
    first = payload[0]
    if not isinstance(first, dict):
        return None
    summary = first.get("summary_text")
    if not isinstance(summary, str) or not summary.strip():
        return None
    return summary.strip()

def _extract_error(payload: Any) -> Tuple[Optional[str], Optional[float]]:
    """Error shape: {"error": "...", "estimated_time": 12.5}."""
    if not isinstance(payload, dict):
        return None, None
    error = payload.get("error")
    if isinstance(error, list):
        error = "; ".join(str(item) for item in error)
    if not isinstance(error, str) or not error:
        error = None
    estimated = payload.get("estimated_time")
    if isinstance(estimated, bool) or not isinstance(estimated, (int, float)):
        estimated = None
    return error, (float(estimated) if estimated is not None else None)

def _is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


class ResponseClassifier:
    """Maps raw upstream responses to ClassifiedResult and ApiStatus values."""

    def classify(self, status_code: int, body: str) -> ClassifiedResult:
        """Classifies one upstream response.

        Args:
            status_code: HTTP status code of the response.
            body: Raw response body.

        Returns:
            A successful ClassifiedResult carrying the trimmed summary, or a
            failed one carrying an ErrorKind and a user-facing message.
        """
        payload = _parse_json(body)

        if _is_success_status(status_code):
            summary = _extract_summary(payload)
            if summary is not None:
                logger.info(f"Successfully received summary of length: {len(summary)}")
                return ClassifiedResult(success=True, status_code=status_code, summary_text=SummaryText(summary))
            logger.error(f"Upstream returned {status_code} without a usable summary")
            return ClassifiedResult(
                success=False,
                status_code=status_code,
                error_kind=ErrorKind.EMPTY_RESPONSE,
                user_message=MSG_EMPTY_SUMMARY,
            )

        logger.warning(f"Received error response from upstream: {status_code}")
        error, estimated_time = _extract_error(payload)
        if error is not None:
            kind, message = self._map_error_text(error, status_code)
            logger.error(f"Upstream error classified as {kind.value} (status {status_code})")
            return ClassifiedResult(
                success=False,
                status_code=status_code,
                error_kind=kind,
                user_message=message,
                estimated_time=estimated_time,
            )

        kind, message = STATUS_FALLBACKS.get(
            status_code,
            (
                ErrorKind.UNAVAILABLE,
                UserMessage(f"The summarization service is temporarily unavailable (Status: {status_code})"),
            ),
        )
        return ClassifiedResult(
            success=False,
            status_code=status_code,
            error_kind=kind,
            user_message=message,
            estimated_time=estimated_time,
        )

    def classify_outcome(self, outcome: HttpResult) -> ClassifiedResult:
        """Classifies the final outcome of a retry sequence, including local failures."""
        if outcome.circuit_open:
            return ClassifiedResult(
                success=False, status_code=0, error_kind=ErrorKind.CIRCUIT_OPEN, user_message=MSG_CIRCUIT_OPEN
            )
        if outcome.error is not None:
            if outcome.is_timeout:
                return ClassifiedResult(
                    success=False, status_code=0, error_kind=ErrorKind.TIMEOUT, user_message=MSG_TIMEOUT
                )
            return ClassifiedResult(
                success=False, status_code=0, error_kind=ErrorKind.TRANSPORT, user_message=MSG_TRANSPORT
            )
        return self.classify(outcome.status_code, outcome.body)

    def classify_status(self, status_code: int, body: str) -> ApiStatus:
        """Builds an ApiStatus snapshot from a status probe response."""
        if _is_success_status(status_code):
            return ApiStatus(
                availability=ApiAvailability.AVAILABLE,
                status_code=status_code,
                message="API is available and ready",
            )

        classified = self.classify(status_code, body)
        if status_code == 503 and classified.estimated_time is not None:
            return ApiStatus(
                availability=ApiAvailability.LOADING,
                status_code=status_code,
                message="Model is loading",
                estimated_wait_seconds=classified.estimated_time,
            )
        return ApiStatus(
            availability=ApiAvailability.UNAVAILABLE,
            status_code=status_code,
            message=f"API unavailable (Status: {status_code})",
        )

    @staticmethod
    def _map_error_text(error: str, status_code: int) -> Tuple[ErrorKind, UserMessage]:
        lowered = error.lower()
        if "loading" in lowered or "warming up" in lowered:
            return ErrorKind.COLD_START, MSG_COLD_START
        if "rate limit" in lowered or "too many" in lowered or status_code == 429:
            return ErrorKind.THROTTLED, MSG_THROTTLED
        if "timeout" in lowered or "timed out" in lowered:
            return ErrorKind.TIMEOUT, MSG_TIMEOUT
        if "token" in lowered or "authentication" in lowered or status_code == 401:
            return ErrorKind.AUTH, MSG_AUTH
        return ErrorKind.UPSTREAM_ERROR, MSG_UPSTREAM_ERROR
