"""Interface for interacting with the user (output only).

Defines the contract for displaying summaries, status snapshots, errors,
warnings and informational messages, allowing different UI implementations
(e.g., console, web).
"""

import abc
from typing import Any, Optional

from aisummarizer.domain.models.summarization import ApiStatus

class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_summary(self, summary: str, processing_time: Optional[float] = None, **kwargs: Any) -> None:
        """Displays a generated summary to the user.

        Args:
            summary: The summary text.
            processing_time: Seconds spent producing it, if known.
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_status(self, status: ApiStatus, **kwargs: Any) -> None:
        """Displays an upstream status snapshot."""
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass
