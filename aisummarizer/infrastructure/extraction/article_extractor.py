"""Extracts readable article text from web pages using httpx and BeautifulSoup."""

import logging
import re
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from aisummarizer.domain.interfaces.content_source import ContentExtractor
from aisummarizer.domain.models.content import ExtractedContent
from aisummarizer.infrastructure.monitoring.log_sanitizer import sanitize_content_type, sanitize_url

logger = logging.getLogger(__name__)

EXTRACTION_TIMEOUT_SECONDS = 30.0
MIN_EXTRACTED_LENGTH = 50
DEFAULT_TITLE = "Untitled Article"

FETCH_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; AISummarizer/1.0)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

# Tried in order; the first match is treated as the article body
CONTENT_SELECTORS = ("article", "main", "[role=main]", "body")
NON_CONTENT_TAGS = ("script", "style", "noscript", "nav", "header", "footer", "aside", "form")

_WHITESPACE = re.compile(r"\s+")

def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()

class ArticleExtractor(ContentExtractor):
    """ContentExtractor that fetches HTML and keeps the main article text."""

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        self.http_client = http_client

    async def _fetch(self, url: str) -> httpx.Response:
        if self.http_client is not None:
            response = await self.http_client.get(
                url, headers=FETCH_HEADERS, timeout=EXTRACTION_TIMEOUT_SECONDS, follow_redirects=True
            )
        else:
            async with httpx.AsyncClient(follow_redirects=True, timeout=EXTRACTION_TIMEOUT_SECONDS) as client:
                response = await client.get(url, headers=FETCH_HEADERS)
        response.raise_for_status()
        return response

    async def extract(self, url: str) -> ExtractedContent:
        """Fetches the page and extracts its article text.

        Args:
            url: Absolute http(s) URL of the article.

        Returns:
            ExtractedContent.succeeded(...) with at least 50 characters of
            text, or ExtractedContent.failed(...) with a short reason.
        """
        logger.info(f"Extracting content from URL: {sanitize_url(url)}")
        try:
            response = await self._fetch(url)
            logger.debug(f"Fetched page with content type: {sanitize_content_type(response.headers.get('content-type'))}")
            soup = BeautifulSoup(response.content, "lxml")
            content = self._extract_body(soup)

            if not content:
                logger.warning(f"No readable content found at URL: {sanitize_url(url)}")
                return ExtractedContent.failed(
                    "Could not extract readable content from this URL. The page may not contain "
                    "article content or may be behind a paywall.",
                    url,
                )
            if len(content) < MIN_EXTRACTED_LENGTH:
                return ExtractedContent.failed(
                    f"Extracted content is too short for meaningful summarization "
                    f"(minimum {MIN_EXTRACTED_LENGTH} characters required).",
                    url,
                )

            logger.info(f"Successfully extracted {len(content)} characters from URL")
            return ExtractedContent.succeeded(
                content=content,
                title=self._extract_title(soup),
                author=self._extract_author(soup),
                source_url=url,
            )

        except httpx.TimeoutException:
            logger.warning(f"Content extraction timed out for URL: {sanitize_url(url)}")
            return ExtractedContent.failed("The page took too long to load. Please try a different URL.", url)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error during URL content extraction: {type(e).__name__}")
            return ExtractedContent.failed(
                "Failed to access the URL. Please check that the URL is correct and accessible.", url
            )
        except Exception as e:
            logger.error(f"Unexpected error during URL content extraction: {e}", exc_info=True)
            return ExtractedContent.failed(
                "An unexpected error occurred while extracting content from the URL.", url
            )

    @staticmethod
    def _extract_body(soup: BeautifulSoup) -> str:
        for tag in soup(list(NON_CONTENT_TAGS)):
            tag.decompose()

        area = None
        for selector in CONTENT_SELECTORS:
            area = soup.select_one(selector)
            if area is not None:
                break
        if area is None:
            area = soup

        paragraphs = [_collapse(p.get_text(" ")) for p in area.find_all("p")]
        paragraphs = [p for p in paragraphs if p]
        if paragraphs:
            return " ".join(paragraphs)
        return _collapse(area.get_text(" "))

    @staticmethod
    def _extract_title(soup: BeautifulSoup) -> str:
        og_title = soup.find("meta", attrs={"property": "og:title"})
        if og_title and og_title.get("content"):
            return _collapse(og_title["content"])
        if soup.title and soup.title.string:
            return _collapse(soup.title.string)
        return DEFAULT_TITLE

    @staticmethod
    def _extract_author(soup: BeautifulSoup) -> str:
        author = soup.find("meta", attrs={"name": "author"})
        if author and author.get("content"):
            return _collapse(author["content"])
        return ""
