"""Console output formatting for the CLI."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table


class OutputFormatter:
    """Prints user-facing messages with rich.

    Informational output goes to stdout and is suppressed in quiet mode;
    warnings and errors always go to stderr.
    """

    def __init__(
        self,
        quiet: bool = False,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        """Initialize output formatter.

        Args:
            quiet: Suppress non-essential output
            console: Console for regular output
            err_console: Console for warnings and errors
        """
        self.quiet = quiet
        self.console = console or Console(emoji=False)
        self.err_console = err_console or Console(stderr=True, emoji=False)

    def warning(self, message: str) -> None:
        self.err_console.print(f"[yellow]{escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        self.err_console.print(f"[red]error: {escape(message)}[/red]")

    def usage(self, text: str) -> None:
        """Print a usage line to stderr, even in quiet mode."""
        self.err_console.print(text, markup=False, highlight=False)

    def print_summary(self, title: str, items: list[tuple[str, str]]) -> None:
        """Print a two-column summary table.

        Args:
            title: Table title
            items: (label, value) rows
        """
        if self.quiet:
            return
        table = Table(title=title, show_header=False, title_justify="left")
        table.add_column("Field", style="bold")
        table.add_column("Value")
        for label, value in items:
            table.add_row(escape(label), escape(value))
        self.console.print(table)
