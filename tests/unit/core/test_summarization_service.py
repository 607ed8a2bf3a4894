import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from aisummarizer.core.services.summarization_service import SummarizationService
from aisummarizer.domain.interfaces.content_source import ContentExtractor, ContentValidator
from aisummarizer.domain.interfaces.summarizer import ContentSummarizer
from aisummarizer.domain.models.content import (
    ContentRequest, ExtractedContent, ValidationErrorType, ValidationResult
)
from aisummarizer.domain.models.summarization import (
    ApiAvailability, ApiStatus, ErrorKind, SummaryFailure, SummarySuccess
)
from aisummarizer.infrastructure.optimization.content_optimizer import ContentOptimizer

ARTICLE_URL = "https://news.example.com/transit"

@pytest.fixture
def mock_summarizer():
    summarizer = MagicMock(spec=ContentSummarizer)
    summarizer.summarize_text = AsyncMock(return_value=SummarySuccess(summary="the plan was approved", processing_time=0.1))
    summarizer.test_connection = AsyncMock(return_value=True)
    summarizer.get_status = AsyncMock(return_value=ApiStatus(ApiAvailability.AVAILABLE, 200, "API is available and ready"))
    return summarizer

@pytest.fixture
def mock_validator():
    validator = MagicMock(spec=ContentValidator)
    validator.validate = AsyncMock(return_value=ValidationResult.success())
    return validator

@pytest.fixture
def mock_extractor():
    extractor = MagicMock(spec=ContentExtractor)
    extractor.extract = AsyncMock(return_value=ExtractedContent.succeeded(
        content="Extracted   article text. Advertisement More text.",
        title="Transit", author="Jane", source_url=ARTICLE_URL,
    ))
    return extractor

@pytest.fixture
def service(mock_summarizer, mock_validator, mock_extractor):
    return SummarizationService(
        summarizer=mock_summarizer,
        validator=mock_validator,
        extractor=mock_extractor,
        optimizer=ContentOptimizer(),
    )

@pytest.mark.asyncio
async def test_text_request_is_prepared_summarized_and_polished(service, mock_summarizer, mock_extractor, long_text):
    result = await service.process(ContentRequest.from_text(long_text + "\n\n  Click here"))

    assert isinstance(result, SummarySuccess)
    assert result.summary == "The plan was approved."
    assert result.processing_time >= 0
    mock_summarizer.summarize_text.assert_awaited_once_with(long_text)
    mock_extractor.extract.assert_not_called()

@pytest.mark.asyncio
async def test_url_request_uses_extracted_content(service, mock_summarizer, mock_extractor):
    result = await service.process(ContentRequest.from_url(ARTICLE_URL))

    assert result.ok
    mock_extractor.extract.assert_awaited_once_with(ARTICLE_URL)
    mock_summarizer.summarize_text.assert_awaited_once_with("Extracted article text. More text.")

@pytest.mark.asyncio
async def test_url_summary_carries_article_details(service, mock_extractor):
    mock_extractor.extract.return_value = ExtractedContent.succeeded(
        content="The council approved three tram lines and more night buses for the region.",
        title="Transit Plan", author="Jane Reporter", source_url=ARTICLE_URL,
    )

    result = await service.process(ContentRequest.from_url(ARTICLE_URL))

    assert isinstance(result, SummarySuccess)
    assert result.title == "Transit Plan"
    assert result.author == "Jane Reporter"
    assert result.source_length == len("The council approved three tram lines and more night buses for the region.")

@pytest.mark.asyncio
async def test_url_summary_without_author(service, mock_extractor):
    mock_extractor.extract.return_value = ExtractedContent.succeeded(
        content="The council approved three tram lines and more night buses for the region.",
        title="Transit Plan", author="", source_url=ARTICLE_URL,
    )

    result = await service.process(ContentRequest.from_url(ARTICLE_URL))

    assert result.title == "Transit Plan"
    assert result.author is None

@pytest.mark.asyncio
async def test_text_summary_has_no_article_details(service, long_text):
    result = await service.process(ContentRequest.from_text(long_text))

    assert result.ok
    assert (result.title, result.author, result.source_length) == (None, None, None)

@pytest.mark.asyncio
async def test_validation_failure_stops_pipeline(service, mock_validator, mock_summarizer):
    mock_validator.validate.return_value = ValidationResult.failure(
        "Text content must be at least 50 characters", ValidationErrorType.CONTENT_TOO_SHORT
    )

    result = await service.process(ContentRequest.from_text("short"))

    assert isinstance(result, SummaryFailure)
    assert result.error_kind is ErrorKind.VALIDATION
    assert result.message == "Text content must be at least 50 characters"
    mock_summarizer.summarize_text.assert_not_called()

@pytest.mark.asyncio
async def test_extraction_failure_stops_pipeline(service, mock_extractor, mock_summarizer):
    mock_extractor.extract.return_value = ExtractedContent.failed("The page took too long to load.", ARTICLE_URL)

    result = await service.process(ContentRequest.from_url(ARTICLE_URL))

    assert result.error_kind is ErrorKind.EXTRACTION
    assert result.message == "The page took too long to load."
    mock_summarizer.summarize_text.assert_not_called()

@pytest.mark.asyncio
async def test_summarizer_failure_passed_through(service, mock_summarizer, long_text):
    failure = SummaryFailure(error_kind=ErrorKind.THROTTLED, message="Too many requests.", status_code=429)
    mock_summarizer.summarize_text.return_value = failure

    assert await service.process(ContentRequest.from_text(long_text)) == failure

@pytest.mark.asyncio
async def test_unexpected_error_becomes_generic_failure(service, mock_summarizer, long_text):
    mock_summarizer.summarize_text.side_effect = RuntimeError("driver exploded")

    result = await service.process(ContentRequest.from_text(long_text))

    assert result.error_kind is ErrorKind.UNEXPECTED
    assert "driver exploded" not in result.message

@pytest.mark.asyncio
async def test_cancellation_propagates(service, mock_summarizer, long_text):
    mock_summarizer.summarize_text.side_effect = asyncio.CancelledError()
    with pytest.raises(asyncio.CancelledError):
        await service.process(ContentRequest.from_text(long_text))

@pytest.mark.asyncio
async def test_health_and_status_delegate(service, mock_summarizer):
    assert await service.is_healthy() is True
    assert (await service.get_status()).is_available

    mock_summarizer.test_connection.side_effect = RuntimeError("boom")
    assert await service.is_healthy() is False
