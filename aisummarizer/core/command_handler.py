"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), delegates the work to
the SummarizationService and reports outcomes through the UserInterface.
Each handler returns True on success so the CLI can choose an exit code.
"""

import logging
from pathlib import Path

from aisummarizer.core.services.summarization_service import SummarizationService
from aisummarizer.domain.interfaces.user_interface import UserInterface
from aisummarizer.domain.models.content import ContentRequest
from aisummarizer.domain.models.summarization import SummarizationResult

logger = logging.getLogger(__name__)

MSG_SUMMARIZE_FAILED = "Summarization failed due to an internal error. Please try again."
MSG_STATUS_FAILED = "Failed to check the summarization service status."

class CommandHandler:
    """Handles incoming commands and delegates to the summarization service."""

    def __init__(self, summarization_service: SummarizationService, ui: UserInterface):
        self.summarization_service = summarization_service
        self.ui = ui

    def _report(self, result: SummarizationResult) -> bool:
        if result.ok:
            article = {}
            if result.title or result.author or result.source_length:
                article = {"article_title": result.title, "author": result.author, "source_length": result.source_length}
            self.ui.display_summary(result.summary, processing_time=result.processing_time, **article)
            return True
        logger.info(f"Summarization failed with {result.error_kind.value}")
        self.ui.display_error(result.message)
        return False

    async def handle_summarize_text(self, text: str) -> bool:
        """Handles 'summarize' with inline text."""
        logger.info(f"Handling 'summarize' command for text of length: {len(text)}")
        try:
            result = await self.summarization_service.process(ContentRequest.from_text(text))
        except Exception as e:
            logger.error(f"Summarize command failed: {e}", exc_info=True)
            self.ui.display_error(MSG_SUMMARIZE_FAILED)
            return False
        return self._report(result)

    async def handle_summarize_file(self, file_path: Path) -> bool:
        """Handles 'summarize --file': reads the file as UTF-8 text and summarizes it."""
        logger.info(f"Handling 'summarize' command for file: {file_path}")
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {file_path}: {e}")
            self.ui.display_error(f"Could not read file '{file_path}'. Check that it exists and contains UTF-8 text.")
            return False
        return await self.handle_summarize_text(text)

    async def handle_summarize_url(self, url: str) -> bool:
        """Handles 'summarize --url'."""
        logger.info("Handling 'summarize' command for a URL")
        self.ui.display_info("Fetching article...")
        try:
            result = await self.summarization_service.process(ContentRequest.from_url(url))
        except Exception as e:
            logger.error(f"Summarize command failed: {e}", exc_info=True)
            self.ui.display_error(MSG_SUMMARIZE_FAILED)
            return False
        return self._report(result)

    async def handle_status(self) -> bool:
        """Handles 'status': shows a fresh availability snapshot."""
        logger.info("Handling 'status' command")
        try:
            status = await self.summarization_service.get_status()
        except Exception as e:
            logger.error(f"Status command failed: {e}", exc_info=True)
            self.ui.display_error(MSG_STATUS_FAILED)
            return False
        self.ui.display_status(status)
        return status.is_available or status.is_loading

    async def handle_check(self) -> bool:
        """Handles 'check': reports whether the upstream answers at all."""
        logger.info("Handling 'check' command")
        if await self.summarization_service.is_healthy():
            self.ui.display_info("Summarization service is reachable.")
            return True
        self.ui.display_error("Summarization service could not be reached.")
        return False
