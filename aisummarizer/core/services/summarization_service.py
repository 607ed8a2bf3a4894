"""Application Service for the summarization use case.

Coordinates validation, article extraction, input preparation, the call to
the summarization model and summary polishing. It knows when each step runs,
not how any of them work.
"""

import dataclasses
import logging
import time

from aisummarizer.domain.interfaces.content_source import ContentExtractor, ContentValidator
from aisummarizer.domain.interfaces.summarizer import ContentSummarizer
from aisummarizer.domain.models.common import SummaryText, UserMessage
from aisummarizer.domain.models.content import ContentRequest, ContentType
from aisummarizer.domain.models.summarization import (
    ApiStatus, ErrorKind, SummarizationResult, SummaryFailure
)
from aisummarizer.infrastructure.monitoring.log_sanitizer import sanitize_url
from aisummarizer.infrastructure.optimization.content_optimizer import ContentOptimizer

logger = logging.getLogger(__name__)

MSG_UNEXPECTED = UserMessage("An unexpected error occurred while processing your request. Please try again.")

class SummarizationService:
    """Runs a ContentRequest through the full summarization pipeline."""

    def __init__(
        self,
        summarizer: ContentSummarizer,
        validator: ContentValidator,
        extractor: ContentExtractor,
        optimizer: ContentOptimizer,
    ):
        """Initializes the SummarizationService.

        Args:
            summarizer: Client for the summarization model.
            validator: Checks requests before any upstream work.
            extractor: Turns article URLs into text.
            optimizer: Cleans input and polishes summaries.
        """
        self.summarizer = summarizer
        self.validator = validator
        self.extractor = extractor
        self.optimizer = optimizer

    async def process(self, request: ContentRequest) -> SummarizationResult:
        """Validates, extracts, summarizes and polishes.

        Returns:
            SummarySuccess with the overall processing time, or SummaryFailure.

        Raises:
            asyncio.CancelledError: If the calling task is cancelled.
        """
        start_time = time.perf_counter()
        logger.info(f"Starting summarization process for content type: {request.content_type.value}")

        try:
            validation = await self.validator.validate(request)
            if not validation.is_valid:
                logger.warning(f"Content validation failed: {validation.error_type}")
                return SummaryFailure(error_kind=ErrorKind.VALIDATION, message=UserMessage(validation.error_message))

            extracted = None
            if request.content_type is ContentType.URL:
                logger.info(f"Extracting content from URL: {sanitize_url(request.content)}")
                extracted = await self.extractor.extract(request.content.strip())
                if not extracted.success:
                    logger.warning("Content extraction failed")
                    return SummaryFailure(
                        error_kind=ErrorKind.EXTRACTION,
                        message=UserMessage(extracted.error_message or "Could not extract content from the URL."),
                    )
                text = extracted.content
            else:
                logger.debug(f"Using direct text content, length: {len(request.content)}")
                text = request.content

            prepared = self.optimizer.prepare_input(text)
            result = await self.summarizer.summarize_text(prepared)
            if not result.ok:
                return result

            elapsed = time.perf_counter() - start_time
            logger.info(f"Summarization completed successfully in {elapsed * 1000:.0f}ms")
            polished = dataclasses.replace(
                result,
                summary=SummaryText(self.optimizer.polish_summary(result.summary)),
                processing_time=elapsed,
            )
            if extracted is not None:
                polished = dataclasses.replace(
                    polished,
                    title=extracted.title or None,
                    author=extracted.author or None,
                    source_length=len(extracted.content),
                )
            return polished

        except Exception as e:
            logger.error(f"Unexpected error during summarization orchestration: {e}", exc_info=True)
            return SummaryFailure(error_kind=ErrorKind.UNEXPECTED, message=MSG_UNEXPECTED)

    async def is_healthy(self) -> bool:
        """True when the summarization upstream is reachable."""
        try:
            return await self.summarizer.test_connection()
        except Exception as e:
            logger.error(f"Health check failed: {e}", exc_info=True)
            return False

    async def get_status(self) -> ApiStatus:
        return await self.summarizer.get_status()
