"""Concrete implementation of the ContentSummarizer interface using the
Hugging Face Inference API.

Every summarization call goes through the shared rate limiter, then the
retry executor, whose individual attempts each pass through the circuit
breaker. Responses are classified into SummarySuccess / SummaryFailure so
callers never see transport exceptions.
"""

import logging
import time
from typing import Optional

import httpx

from aisummarizer.domain.events.api_events import (
    ApiCallFailed, ApiCallInitiated, ApiCallSucceeded, EventListener, dispatch_event
)
from aisummarizer.domain.interfaces.summarizer import ContentSummarizer
from aisummarizer.domain.models.common import UserMessage
from aisummarizer.domain.models.summarization import (
    ApiAvailability, ApiStatus, ErrorKind, SummarizationResult, SummaryFailure
)
from aisummarizer.infrastructure.ai.huggingface.options import HuggingFaceOptions
from aisummarizer.infrastructure.ai.huggingface.request_builder import RequestBuilder
from aisummarizer.infrastructure.ai.huggingface.response_classifier import ResponseClassifier
from aisummarizer.infrastructure.resilience.api_retry import RetryExecutor
from aisummarizer.infrastructure.resilience.circuit_breaker import CircuitBreaker
from aisummarizer.infrastructure.resilience.http_result import HttpResult
from aisummarizer.infrastructure.resilience.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

PROVIDER_NAME = "huggingface"
CONNECTION_TEST_TEXT = "This is a short test message for API connectivity verification."
STATUS_PROBE_TEXT = "Status check"

MSG_EMPTY_INPUT = UserMessage("Text content cannot be empty.")
MSG_UNEXPECTED = UserMessage("An unexpected error occurred during summarization. Please try again.")

def build_http_client(
    options: HuggingFaceOptions,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Creates an AsyncClient bound to the configured endpoint and credentials."""
    headers = {"User-Agent": options.user_agent}
    if options.api_token:
        headers["Authorization"] = f"Bearer {options.api_token}"
    return httpx.AsyncClient(
        base_url=options.base_url,
        headers=headers,
        timeout=options.timeout_seconds,
        transport=transport,
    )

class HuggingFaceApiClient(ContentSummarizer):
    """Resilient client for one Hugging Face summarization model."""

    def __init__(
        self,
        options: HuggingFaceOptions,
        rate_limiter: Optional[RateLimiter] = None,
        retry_executor: Optional[RetryExecutor] = None,
        circuit_breaker: Optional[CircuitBreaker] = None,
        request_builder: Optional[RequestBuilder] = None,
        response_classifier: Optional[ResponseClassifier] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        on_event: Optional[EventListener] = None,
    ):
        """Initializes the client.

        Args:
            options: Endpoint, credentials and resilience settings.
            rate_limiter: Shared limiter; built from options if omitted.
            retry_executor: Retry policy; built from options if omitted.
            circuit_breaker: Shared breaker; built from options if omitted.
            request_builder: Payload builder.
            response_classifier: Response interpreter.
            http_client: Preconfigured AsyncClient (tests inject a MockTransport).
            on_event: Optional observer for API call events.
        """
        self.options = options
        self._on_event = on_event
        self.rate_limiter = rate_limiter or RateLimiter(
            requests_per_minute=options.requests_per_minute, on_event=on_event
        )
        self.retry_executor = retry_executor or RetryExecutor(
            max_attempts=options.max_retry_attempts,
            base_delay_ms=options.base_retry_delay_ms,
            on_event=on_event,
        )
        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            name=PROVIDER_NAME,
            failure_threshold=options.circuit_failure_threshold,
            break_duration=options.circuit_break_seconds,
            on_event=on_event,
        )
        self.request_builder = request_builder or RequestBuilder()
        self.response_classifier = response_classifier or ResponseClassifier()
        self._owns_http_client = http_client is None
        self.http_client = http_client or build_http_client(options)

        if not options.api_token:
            logger.warning("Hugging Face API token is not configured; upstream calls will fail authentication.")
        logger.info(f"HuggingFaceApiClient initialized for model: {options.summarization_model}")

    async def _post(self, payload: dict) -> httpx.Response:
        return await self.http_client.post(self.options.model_path, json=payload)

    async def summarize_text(self, text: str) -> SummarizationResult:
        """Summarizes text through the full resilience pipeline.

        Raises:
            asyncio.CancelledError: Propagated from any suspension point.
        """
        if not text or not text.strip():
            logger.warning("Empty text provided for summarization")
            return SummaryFailure(error_kind=ErrorKind.VALIDATION, message=MSG_EMPTY_INPUT)

        logger.info(f"Starting text summarization for content length: {len(text)}")
        start_time = time.perf_counter()
        try:
            await self.rate_limiter.acquire()

            request = self.request_builder.build_request(text)
            payload = request.to_payload()

            async def attempt() -> HttpResult:
                dispatch_event(ApiCallInitiated(provider=PROVIDER_NAME, endpoint=self.options.model_path), self._on_event)
                try:
                    response = await self._post(payload)
                except httpx.TransportError as e:
                    logger.warning(f"Transport error calling {self.options.model_path}: {type(e).__name__}")
                    return HttpResult.from_exception(e)
                return HttpResult.from_response(response)

            async def guarded_attempt() -> HttpResult:
                return await self.circuit_breaker.call(attempt)

            outcome = await self.retry_executor.execute_with_retry(guarded_attempt)
            classified = self.response_classifier.classify_outcome(outcome)
            elapsed = time.perf_counter() - start_time
            result = classified.to_result(processing_time=elapsed)

            if result.ok:
                dispatch_event(
                    ApiCallSucceeded(provider=PROVIDER_NAME, endpoint=self.options.model_path, latency_ms=elapsed * 1000),
                    self._on_event,
                )
            else:
                logger.warning(f"Summarization failed: {result.error_kind.value} (status {result.status_code})")
                dispatch_event(
                    ApiCallFailed(
                        provider=PROVIDER_NAME,
                        endpoint=self.options.model_path,
                        error_type=result.error_kind.value,
                        status_code=result.status_code,
                    ),
                    self._on_event,
                )
            return result

        except Exception as e:
            logger.error(f"Unexpected error during text summarization: {e}", exc_info=True)
            return SummaryFailure(error_kind=ErrorKind.UNEXPECTED, message=MSG_UNEXPECTED)

    async def test_connection(self) -> bool:
        """Reports whether the upstream is reachable.

        "Connected" means the probe summary succeeded or produced a failure
        carrying a non-zero status code, i.e. the upstream answered at all.
        It does not mean the upstream is healthy.
        """
        logger.debug("Testing connection to Hugging Face API")
        result = await self.summarize_text(CONNECTION_TEST_TEXT)
        is_connected = result.ok or result.status_code != 0
        logger.info(f"Hugging Face API connection test result: {is_connected}")
        return is_connected

    async def get_status(self) -> ApiStatus:
        """Sends one lightweight probe and reports model availability.

        The probe bypasses the rate limiter, retry loop and circuit breaker so a
        status check neither waits for quota nor influences breaker state.
        """
        logger.debug("Checking Hugging Face API status")
        payload = self.request_builder.build_request(STATUS_PROBE_TEXT).to_payload()
        try:
            response = await self._post(payload)
        except httpx.TransportError as e:
            logger.error(f"Failed to check Hugging Face API status: {type(e).__name__}")
            return ApiStatus(
                availability=ApiAvailability.UNAVAILABLE,
                status_code=0,
                message="Failed to check API status",
            )
        return self.response_classifier.classify_status(response.status_code, response.text)

    async def aclose(self) -> None:
        """Closes the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "HuggingFaceApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
