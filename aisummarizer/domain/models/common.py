"""Defines common Value Objects used across different domain contexts.

These objects represent simple values or concepts like input text, URLs,
summaries and user-facing messages, ensuring consistency and type safety.
"""

from typing import NewType

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
InputText = NewType("InputText", str)          # Raw text supplied by the caller
SourceUrl = NewType("SourceUrl", str)          # URL of an article to summarize
SummaryText = NewType("SummaryText", str)      # Summary produced by the model
UserMessage = NewType("UserMessage", str)      # Short, non-technical message shown to the user

# === Upstream Context ===
ModelId = NewType("ModelId", str)              # e.g. 'facebook/bart-large-cnn'
StatusCode = NewType("StatusCode", int)        # HTTP status code, 0 when no response was received
