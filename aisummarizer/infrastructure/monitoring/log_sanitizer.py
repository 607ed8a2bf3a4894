"""Makes user-supplied strings safe to write into log lines.

Line breaks and control characters are neutralised so a crafted input cannot
forge extra log entries, and long values are shortened.
"""

from typing import Optional
from urllib.parse import urlsplit

DEFAULT_MAX_LENGTH = 200
CONTENT_TYPE_MAX_LENGTH = 50

_REPLACEMENTS = (
    ("\r\n", " "),
    ("\r", " "),
    ("\n", " "),
    ("\t", " "),
    ("\0", ""),
    ("\x1b", ""),
)

def sanitize(value: Optional[str]) -> str:
    """Strips line breaks, tabs, NUL and ESC characters. None or empty gives 'null'."""
    if not value:
        return "null"
    for old, new in _REPLACEMENTS:
        value = value.replace(old, new)
    return value.strip()

def sanitize_and_truncate(value: Optional[str], max_length: int = DEFAULT_MAX_LENGTH) -> str:
    sanitized = sanitize(value)
    if len(sanitized) > max_length:
        return sanitized[:max_length] + "..."
    return sanitized

def sanitize_url(url: Optional[str]) -> str:
    """Sanitizes a URL; very long URLs are reduced to their host."""
    if not url:
        return "null"
    sanitized = sanitize(url)
    if len(sanitized) <= DEFAULT_MAX_LENGTH:
        return sanitized
    host = urlsplit(sanitized).hostname
    if host:
        return f"{host}/... (truncated, original length: {len(sanitized)})"
    return sanitized[:DEFAULT_MAX_LENGTH] + "..."

def sanitize_content_type(content_type: Optional[str]) -> str:
    if not content_type:
        return "unknown"
    return sanitize_and_truncate(content_type, CONTENT_TYPE_MAX_LENGTH)
