"""Interfaces for validating requests and obtaining article text.

Keeps the orchestration logic independent of how URLs are fetched and
parsed, so extraction and validation can be swapped or mocked.
"""

import abc

from ..models.content import ContentRequest, ExtractedContent, ValidationResult


class ContentValidator(abc.ABC):
    """Checks that a content request is worth sending upstream."""

    @abc.abstractmethod
    async def validate(self, request: ContentRequest) -> ValidationResult:
        """Validates format (and for URLs, reachability) of the request."""
        pass


class ContentExtractor(abc.ABC):
    """Turns a URL into readable article text."""

    @abc.abstractmethod
    async def extract(self, url: str) -> ExtractedContent:
        """Extracts the article body, title and author from a URL.

        Failures are reported through ExtractedContent.failed(), not raised.
        """
        pass
