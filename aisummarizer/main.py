"""Main entry point for the AI Summarizer application.

Sets up the Typer CLI application, performs dependency injection (Composition
Root), defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx
import typer
from typing_extensions import Annotated

# --- Core Layer ---
from aisummarizer.core.command_handler import CommandHandler
from aisummarizer.core.services.summarization_service import SummarizationService

# --- Infrastructure Layer ---
# Config
from aisummarizer.infrastructure.config.settings import (
    ConfigurationError, get_config, get_huggingface_options, load_configuration
)
# UI
from aisummarizer.infrastructure.cli.display import ConsoleDisplay
# AI Client
from aisummarizer.infrastructure.ai.huggingface.api_client import HuggingFaceApiClient, build_http_client
# Content
from aisummarizer.infrastructure.extraction.article_extractor import ArticleExtractor
from aisummarizer.infrastructure.validation.content_validator import HttpContentValidator
from aisummarizer.infrastructure.optimization.content_optimizer import ContentOptimizer
# Monitoring
from aisummarizer.infrastructure.monitoring.logger_setup import DEFAULT_LOG_FORMAT, resolve_log_level, setup_logging

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

def create_dependencies(transport: Optional[httpx.AsyncBaseTransport] = None) -> Dict[str, Any]:
    """Creates and wires up all dependencies for one command run.

    This acts as the Composition Root. HTTP clients are created here and must
    be closed with close_dependencies() inside the same event loop.

    Args:
        transport: Optional httpx transport shared by every HTTP client.

    Raises:
        ConfigurationError: If configured values are unusable.
    """
    # 1. Load Configuration First
    load_configuration()
    setup_logging(
        log_level=resolve_log_level(get_config('logging.level', 'WARNING')),
        log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
        log_file=get_config('logging.file'),
    )
    logger.info("Initializing application dependencies...")

    dependencies: Dict[str, Any] = {}

    # 2. Infrastructure adapters
    options = get_huggingface_options()
    dependencies['ui'] = ConsoleDisplay()
    dependencies['api_http_client'] = build_http_client(options, transport=transport)
    dependencies['web_http_client'] = httpx.AsyncClient(transport=transport)
    dependencies['api_client'] = HuggingFaceApiClient(options, http_client=dependencies['api_http_client'])
    dependencies['validator'] = HttpContentValidator(http_client=dependencies['web_http_client'])
    dependencies['extractor'] = ArticleExtractor(http_client=dependencies['web_http_client'])
    dependencies['optimizer'] = ContentOptimizer()

    # 3. Core services
    dependencies['summarization_service'] = SummarizationService(
        summarizer=dependencies['api_client'],
        validator=dependencies['validator'],
        extractor=dependencies['extractor'],
        optimizer=dependencies['optimizer'],
    )
    dependencies['command_handler'] = CommandHandler(
        summarization_service=dependencies['summarization_service'],
        ui=dependencies['ui'],
    )
    logger.info("All dependencies initialized successfully.")
    return dependencies

async def close_dependencies(dependencies: Dict[str, Any]) -> None:
    for key in ('api_http_client', 'web_http_client'):
        client = dependencies.get(key)
        if client is not None:
            await client.aclose()

# --- Typer App Definition ---
app = typer.Typer(
    name="aisummarizer",
    help="AI Summarizer: summarize text, files and web articles with the Hugging Face Inference API.",
    add_completion=False,
)

# --- Helper for Running Async Commands ---
def run_async(command: Callable[[CommandHandler], Awaitable[bool]]) -> None:
    """Builds dependencies, runs one async handler call and exits with its outcome."""
    try:
        dependencies = create_dependencies()
    except ConfigurationError as e:
        logger.error(f"Application initialization failed: {e}")
        ConsoleDisplay().display_error(f"Configuration error: {e}")
        raise typer.Exit(code=2)

    async def runner() -> bool:
        try:
            return await command(dependencies['command_handler'])
        finally:
            await close_dependencies(dependencies)

    try:
        succeeded = asyncio.run(runner())
    except KeyboardInterrupt:
        dependencies['ui'].display_warning("Cancelled.")
        raise typer.Exit(code=130)
    except Exception as e:
        logger.error(f"Error executing async command: {e}", exc_info=True)
        dependencies['ui'].display_error("Command execution failed due to an internal error.")
        raise typer.Exit(code=1)

    if not succeeded:
        raise typer.Exit(code=1)

# --- CLI Commands ---

@app.command()
def summarize(
    text: Annotated[Optional[str], typer.Argument(help="Text to summarize.")] = None,
    url: Annotated[Optional[str], typer.Option("--url", "-u", help="URL of an article to summarize.")] = None,
    file: Annotated[Optional[Path], typer.Option("--file", "-f",
                                                 exists=True, file_okay=True, dir_okay=False,
                                                 readable=True, resolve_path=True,
                                                 help="Path to a UTF-8 text file to summarize.")] = None,
):
    """Summarize text, a text file or a web article (exactly one source)."""
    sources = [source for source in (text, url, file) if source is not None]
    if len(sources) != 1:
        ConsoleDisplay().display_error("Provide exactly one of TEXT, --url or --file.")
        raise typer.Exit(code=2)

    if url is not None:
        run_async(lambda handler: handler.handle_summarize_url(url))
    elif file is not None:
        run_async(lambda handler: handler.handle_summarize_file(file))
    else:
        run_async(lambda handler: handler.handle_summarize_text(text))

@app.command()
def status():
    """Show whether the summarization model is available, loading or unavailable."""
    run_async(lambda handler: handler.handle_status())

@app.command()
def check():
    """Check that the summarization service can be reached."""
    run_async(lambda handler: handler.handle_check())

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()
