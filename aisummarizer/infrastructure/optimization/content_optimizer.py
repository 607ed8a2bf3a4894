"""Prepares input text for the summarization model and tidies its output."""

import logging
import re

logger = logging.getLogger(__name__)

# BART-style models work best under ~1024 tokens, roughly 4000 characters
MAX_INPUT_CHARS = 4000
SENTENCE_BOUNDARY_MIN = 3000
EMPTY_SUMMARY_TEXT = "Unable to generate summary."

_WHITESPACE = re.compile(r"\s+")
_BOILERPLATE = re.compile(r"\b(Click here|Read more|Subscribe|Advertisement)\b", re.IGNORECASE)
_TERMINAL_PUNCTUATION = (".", "!", "?")

class ContentOptimizer:
    """Input clean-up and summary polishing."""

    def prepare_input(self, text: str) -> str:
        """Normalizes whitespace, drops boilerplate phrases and bounds the length.

        Text longer than 4000 characters is cut to 4000 and then back to the
        last full stop, provided that stop lies beyond character 3000.
        """
        if not text or not text.strip():
            return ""

        processed = _WHITESPACE.sub(" ", text).strip()
        processed = _BOILERPLATE.sub("", processed)
        processed = _WHITESPACE.sub(" ", processed).strip()

        if len(processed) > MAX_INPUT_CHARS:
            original_length = len(processed)
            processed = processed[:MAX_INPUT_CHARS]
            last_period = processed.rfind(".")
            if last_period > SENTENCE_BOUNDARY_MIN:
                processed = processed[:last_period + 1]
            logger.debug(f"Truncated input from {original_length} to {len(processed)} characters")

        return processed

    def polish_summary(self, summary: str) -> str:
        """Capitalizes, terminates and strips model artifacts from a summary."""
        if not summary or not summary.strip():
            return EMPTY_SUMMARY_TEXT

        processed = summary.strip()
        if processed[0].islower():
            processed = processed[0].upper() + processed[1:]
        if not processed.endswith(_TERMINAL_PUNCTUATION):
            processed += "."
        return processed.replace("Summary:", "").strip()
