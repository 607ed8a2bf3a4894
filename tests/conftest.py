import asyncio
from pathlib import Path
from typing import Callable, List

import httpx
import pytest
from typer.testing import CliRunner

from aisummarizer.infrastructure.config.settings import clear_test_config, set_config_for_testing

class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

class FakeSleep:
    """Records requested delays and advances the paired clock instead of waiting."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        self.clock.advance(seconds)
        # Still yield to the loop like a real sleep would
        await asyncio.sleep(0)

@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()

@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()

@pytest.fixture
def fake_sleep(fake_clock: FakeClock) -> FakeSleep:
    return FakeSleep(fake_clock)

@pytest.fixture
def summary_response() -> Callable[..., httpx.Response]:
    """Builds upstream success responses."""
    def _build(text: str = "A concise summary.", status_code: int = 200) -> httpx.Response:
        return httpx.Response(status_code, json=[{"summary_text": text}])
    return _build

@pytest.fixture
def error_response() -> Callable[..., httpx.Response]:
    """Builds upstream error responses in the {"error": ...} shape."""
    def _build(status_code: int, error: str, estimated_time: float = None) -> httpx.Response:
        body = {"error": error}
        if estimated_time is not None:
            body["estimated_time"] = estimated_time
        return httpx.Response(status_code, json=body)
    return _build

@pytest.fixture
def long_text() -> str:
    return (
        "The city council approved a new plan to expand public transport across the region. "
        "The plan adds three tram lines and doubles the frequency of night buses. "
        "Officials expect the first line to open within two years, pending funding approval."
    )

@pytest.fixture
def text_file(tmp_path: Path, long_text: str) -> Path:
    path = tmp_path / "article.txt"
    path.write_text(long_text, encoding="utf-8")
    return path

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keeps tests independent of the developer's environment and config files."""
    for name in ("HUGGINGFACE_API_TOKEN", "HF_API_TOKEN", "HUGGINGFACE_BASE_URL", "LOGGING_LEVEL", "LOGGING_FILE"):
        monkeypatch.delenv(name, raising=False)
    set_config_for_testing({"huggingface.api_token": "test-token"})
    yield
    clear_test_config()
