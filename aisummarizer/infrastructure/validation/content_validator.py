"""Validates summarization requests before any upstream work is done."""

import logging
import re
from typing import Optional

import httpx

from aisummarizer.domain.interfaces.content_source import ContentValidator
from aisummarizer.domain.models.content import (
    ContentRequest, ContentType, ValidationErrorType, ValidationResult
)
from aisummarizer.infrastructure.monitoring.log_sanitizer import sanitize_url

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 50
MAX_TEXT_LENGTH = 10000
URL_TIMEOUT_SECONDS = 10.0
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)
VALIDATOR_USER_AGENT = "Mozilla/5.0 (compatible; AISummarizer/1.0)"

class HttpContentValidator(ContentValidator):
    """Checks length limits for text and format plus reachability for URLs."""

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        """Initializes the validator.

        Args:
            http_client: Client used for the HEAD reachability check. A
                short-lived client is created per check when omitted.
        """
        self.http_client = http_client

    async def validate(self, request: ContentRequest) -> ValidationResult:
        logger.debug(f"Starting validation for content type: {request.content_type.value}")
        basic = self.validate_basic_format(request)
        if not basic.is_valid:
            return basic
        if request.content_type is ContentType.URL:
            return await self._validate_url_accessibility(request.content.strip())
        return ValidationResult.success()

    def validate_basic_format(self, request: ContentRequest) -> ValidationResult:
        """Validates without any network access."""
        if not request.content or not request.content.strip():
            return ValidationResult.failure(
                "Content cannot be empty. Please provide text to summarize or a valid URL.",
                ValidationErrorType.EMPTY_CONTENT,
            )
        if request.content_type is ContentType.TEXT:
            return self._validate_text(request.content)
        if request.content_type is ContentType.URL:
            return self._validate_url_format(request.content)
        return ValidationResult.failure(
            f"Unsupported content type: {request.content_type}",
            ValidationErrorType.UNSUPPORTED_CONTENT_TYPE,
        )

    @staticmethod
    def _validate_text(content: str) -> ValidationResult:
        length = len(content.strip())
        if length < MIN_TEXT_LENGTH:
            return ValidationResult.failure(
                f"Text content must be at least {MIN_TEXT_LENGTH} characters for meaningful AI summarization. "
                f"Current length: {length} characters.",
                ValidationErrorType.CONTENT_TOO_SHORT,
            )
        if length > MAX_TEXT_LENGTH:
            return ValidationResult.failure(
                f"Text content exceeds maximum length of {MAX_TEXT_LENGTH:,} characters. "
                f"Current length: {length:,} characters. Please shorten your text.",
                ValidationErrorType.CONTENT_TOO_LONG,
            )
        return ValidationResult.success()

    @staticmethod
    def _validate_url_format(url: str) -> ValidationResult:
        if not URL_PATTERN.match(url.strip()):
            return ValidationResult.failure(
                "Please provide a valid URL starting with http:// or https://. "
                "Example: https://example.com/article",
                ValidationErrorType.INVALID_URL_FORMAT,
            )
        return ValidationResult.success()

    async def _head(self, url: str) -> httpx.Response:
        headers = {"User-Agent": VALIDATOR_USER_AGENT}
        if self.http_client is not None:
            return await self.http_client.head(
                url, headers=headers, timeout=URL_TIMEOUT_SECONDS, follow_redirects=True
            )
        async with httpx.AsyncClient(follow_redirects=True, timeout=URL_TIMEOUT_SECONDS) as client:
            return await client.head(url, headers=headers)

    async def _validate_url_accessibility(self, url: str) -> ValidationResult:
        logger.debug(f"Checking URL accessibility: {sanitize_url(url)}")
        try:
            response = await self._head(url)
        except httpx.TimeoutException:
            logger.warning(f"URL accessibility check timed out for: {sanitize_url(url)}")
            return ValidationResult.failure(
                "The URL took too long to respond. Please try a different URL or check your connection.",
                ValidationErrorType.NETWORK_ACCESSIBILITY,
            )
        except httpx.HTTPError as e:
            logger.warning(f"HTTP error during URL accessibility check for {sanitize_url(url)}: {type(e).__name__}")
            return ValidationResult.failure(
                "Could not connect to the URL. Please verify the URL is correct and accessible.",
                ValidationErrorType.NETWORK_ACCESSIBILITY,
            )

        if not response.is_success:
            logger.warning(f"URL accessibility check failed: {response.status_code} for {sanitize_url(url)}")
            return ValidationResult.failure(
                f"The URL is not accessible (HTTP {response.status_code}). "
                "Please check the URL and ensure it's publicly available.",
                ValidationErrorType.NETWORK_ACCESSIBILITY,
            )

        logger.debug(f"URL accessibility confirmed for: {sanitize_url(url)}")
        return ValidationResult.success()
