"""Interface for hosted summarization models.

Defines the contract for sending text to a summarization provider
(e.g., the Hugging Face Inference API) and probing its availability.
"""

import abc

from ..models.summarization import ApiStatus, SummarizationResult


class ContentSummarizer(abc.ABC):
    """Abstract Base Class for summarization model interactions."""

    @abc.abstractmethod
    async def summarize_text(self, text: str) -> SummarizationResult:
        """Summarizes text asynchronously.

        Args:
            text: The text to summarize.

        Returns:
            A SummarySuccess or SummaryFailure. Expected failures never raise.

        Raises:
            asyncio.CancelledError: If the calling task is cancelled.
        """
        pass

    @abc.abstractmethod
    async def test_connection(self) -> bool:
        """Checks whether the provider is reachable (not necessarily healthy)."""
        pass

    @abc.abstractmethod
    async def get_status(self) -> ApiStatus:
        """Returns a fresh snapshot of the provider's availability."""
        pass
