"""Domain models describing what the caller asked to summarize.

Covers the incoming content request (plain text or URL), the result of
validating it, and article content extracted from a URL.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

# --- Request ---

class ContentType(str, Enum):
    TEXT = "text"
    URL = "url"

@dataclass
class ContentRequest:
    """Central request entity understood by every layer."""
    content: str
    content_type: ContentType
    requested_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_text(cls, text: str) -> "ContentRequest":
        return cls(content=text, content_type=ContentType.TEXT)

    @classmethod
    def from_url(cls, url: str) -> "ContentRequest":
        return cls(content=url, content_type=ContentType.URL)

# --- Validation ---

class ValidationErrorType(str, Enum):
    EMPTY_CONTENT = "empty_content"
    CONTENT_TOO_SHORT = "content_too_short"
    CONTENT_TOO_LONG = "content_too_long"
    INVALID_URL_FORMAT = "invalid_url_format"
    UNSUPPORTED_CONTENT_TYPE = "unsupported_content_type"
    NETWORK_ACCESSIBILITY = "network_accessibility"

@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error_message: str = ""
    error_type: Optional[ValidationErrorType] = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def failure(cls, message: str, error_type: ValidationErrorType) -> "ValidationResult":
        return cls(is_valid=False, error_message=message, error_type=error_type)

# --- Extraction ---

@dataclass(frozen=True)
class ExtractedContent:
    """Article text extracted from a URL, or the reason extraction failed."""
    source_url: str
    success: bool
    content: str = ""
    title: str = ""
    author: str = ""
    error_message: Optional[str] = None
    extracted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def succeeded(cls, content: str, title: str, author: str, source_url: str) -> "ExtractedContent":
        return cls(source_url=source_url, success=True, content=content, title=title, author=author)

    @classmethod
    def failed(cls, error_message: str, source_url: str) -> "ExtractedContent":
        return cls(source_url=source_url, success=False, error_message=error_message)
