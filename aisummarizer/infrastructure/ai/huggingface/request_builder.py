"""Builds summarization requests for the Hugging Face Inference API."""

import logging

from aisummarizer.domain.models.summarization import SummarizationRequest

logger = logging.getLogger(__name__)

MIN_SUMMARY_LENGTH_FLOOR = 50
MAX_SUMMARY_LENGTH_CEILING = 200
MIN_LENGTH_FLOOR = 30
DEFAULT_TEMPERATURE = 0.3

class RequestBuilder:
    """Creates requests whose target length scales with the input length."""

    def build_request(self, text: str) -> SummarizationRequest:
        """Builds a request for the given text.

        max_length is a quarter of the input length clamped to [50, 200];
        min_length is a third of max_length, at least 30. Decoding is
        deterministic, the model is awaited on cold start and upstream
        caching is disabled.
        """
        max_length = max(MIN_SUMMARY_LENGTH_FLOOR, min(MAX_SUMMARY_LENGTH_CEILING, len(text) // 4))
        min_length = max(MIN_LENGTH_FLOOR, max_length // 3)
        logger.debug(f"Built request for {len(text)} chars: max_length={max_length}, min_length={min_length}")
        return SummarizationRequest(
            inputs=text,
            max_length=max_length,
            min_length=min_length,
            do_sample=False,
            temperature=DEFAULT_TEMPERATURE,
            wait_for_model=True,
            use_cache=False,
        )
