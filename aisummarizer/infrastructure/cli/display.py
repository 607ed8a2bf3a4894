import logging
from datetime import datetime
from typing import Any, Optional

from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from aisummarizer.domain.interfaces.user_interface import UserInterface
from aisummarizer.domain.models.summarization import ApiAvailability, ApiStatus

logger = logging.getLogger(__name__)

AVAILABILITY_STYLES = {
    ApiAvailability.AVAILABLE: ("green", "Available"),
    ApiAvailability.LOADING: ("yellow", "Loading"),
    ApiAvailability.UNAVAILABLE: ("red", "Unavailable"),
}

class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        """Initializes the rich Console (tests may pass a recording console)."""
        self._console = console or Console()

    @property
    def console(self) -> Console:
        """Get the Rich console instance for direct operations."""
        return self._console

    def display_summary(self, summary: str, processing_time: Optional[float] = None, **kwargs: Any) -> None:
        """Displays a summary in a panel.

        Args:
            summary: The summary text.
            processing_time: Seconds spent producing it, shown as a subtitle.
            **kwargs: Additional arguments including:
                - title: Panel title (default: "Summary")
                - article_title, author, source_length: Article details shown
                  above the summary for web articles
        """
        title = kwargs.get("title", "Summary")
        timestamp = datetime.now().strftime("%H:%M:%S")
        subtitle = f"[dim]{processing_time:.2f}s[/dim]" if processing_time is not None else None
        logger.debug(f"display_summary called: title={title}, length={len(summary)}")

        body = Text()
        article_title = kwargs.get("article_title")
        author = kwargs.get("author")
        source_length = kwargs.get("source_length")
        if article_title:
            body.append(article_title, style="bold cyan")
            body.append("\n")
        if author:
            body.append(f"By {author}", style="dim")
            body.append("\n")
        if source_length:
            body.append(f"Analysed {source_length:,} characters", style="dim")
            body.append("\n")
        if len(body):
            body.append("\n")
        body.append(summary, style="white")

        panel = Panel(
            body,
            title=f"[bold white]{title}[/bold white] [dim]·[/dim] [dim white]{timestamp}[/dim white]",
            title_align="left",
            subtitle=subtitle,
            subtitle_align="right",
            border_style="blue",
            box=ROUNDED,
            padding=(0, 1),
        )
        self.console.print("")
        self.console.print(panel)

    def display_status(self, status: ApiStatus, **kwargs: Any) -> None:
        """Displays an upstream status snapshot as a small table."""
        color, label = AVAILABILITY_STYLES[status.availability]
        table = Table(show_header=False, box=SIMPLE, border_style=color, padding=(0, 1))
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Status", f"[bold {color}]{label}[/bold {color}]")
        table.add_row("HTTP status", str(status.status_code) if status.status_code else "no response")
        table.add_row("Message", status.message)
        if status.estimated_wait_seconds is not None:
            table.add_row("Estimated wait", f"{status.estimated_wait_seconds:.0f}s")
        self.console.print(table)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style.

        Args:
            error_message: The error message to display.
        """
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        panel = Panel(
            Text(info_message, style="white"),
            title="[bold blue]Info[/bold blue]",
            border_style="blue",
            box=SIMPLE,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        logger.warning(f"Display warning: {warning_message}")
        panel = Panel(
            Text(warning_message, style="white"),
            title="[bold yellow]Warning[/bold yellow]",
            border_style="yellow",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)
