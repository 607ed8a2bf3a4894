"""Connection and resilience options for the Hugging Face Inference API.

Values are supplied by the composition root; the client itself never reads
configuration files or environment variables.
"""

from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api-inference.huggingface.co"
DEFAULT_SUMMARIZATION_MODEL = "facebook/bart-large-cnn"
DEFAULT_USER_AGENT = "AISummarizer/1.0 (Hugging Face Client)"

@dataclass(frozen=True)
class HuggingFaceOptions:
    api_token: str = ""
    base_url: str = DEFAULT_BASE_URL
    summarization_model: str = DEFAULT_SUMMARIZATION_MODEL
    requests_per_minute: int = 30
    timeout_seconds: float = 30.0
    max_retry_attempts: int = 3
    base_retry_delay_ms: int = 1000
    circuit_failure_threshold: int = 5
    circuit_break_seconds: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        if self.requests_per_minute <= 0:
            raise ValueError(f"requests_per_minute must be positive, got {self.requests_per_minute}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.timeout_seconds}")
        if self.max_retry_attempts < 1:
            raise ValueError(f"max_retry_attempts must be at least 1, got {self.max_retry_attempts}")
        if self.base_retry_delay_ms < 0:
            raise ValueError(f"base_retry_delay_ms must not be negative, got {self.base_retry_delay_ms}")
        if self.circuit_failure_threshold < 1:
            raise ValueError(f"circuit_failure_threshold must be at least 1, got {self.circuit_failure_threshold}")
        if self.circuit_break_seconds < 0:
            raise ValueError(f"circuit_break_seconds must not be negative, got {self.circuit_break_seconds}")
        if not self.summarization_model:
            raise ValueError("summarization_model must not be empty")

    @property
    def model_path(self) -> str:
        """Endpoint path relative to base_url."""
        return f"/models/{self.summarization_model}"
