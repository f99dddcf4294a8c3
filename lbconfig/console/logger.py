"""Rich-based logger with lbconfig theming.

Resolution is quiet when it succeeds; the interesting output is the
candidates that were skipped, and the tables the CLI lists policies in.
Output goes to stderr so stdout stays free for resolved configs.
"""
from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.theme import Theme


LBCONFIG_THEME = Theme(
    {
        "info": "bold #7dcfff",
        "warning": "bold #e0af68",
        "highlight": "bold #bb9af7",
        "muted": "dim #565f89",
    }
)


class Logger:
    """Themed console output for resolution diagnostics and CLI listings."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize with the lbconfig theme, writing to stderr by default."""
        self.console = console or Console(theme=LBCONFIG_THEME, stderr=True)

    def warning(self, message: str) -> None:
        """Log a warning message (amber ⚠)."""
        self.console.print(f"[warning]⚠[/warning] {message}")

    def table(
        self,
        title: str | None = None,
        columns: list[str] | None = None,
        rows: list[list[str]] | None = None,
    ) -> Table:
        """Create and optionally populate a styled table.

        If columns and rows are provided, prints immediately. Otherwise
        returns the Table for manual population.
        """
        table = Table(
            title=title,
            title_style="highlight",
            header_style="info",
            border_style="muted",
            row_styles=["", "dim"],
        )

        if columns and rows:
            for col in columns:
                table.add_column(col)
            for row in rows:
                table.add_row(*row)
            self.console.print(table)

        return table


# ─────────────────────────────────────────────────────────────────────────────
# Module-Level Singleton
# ─────────────────────────────────────────────────────────────────────────────

_logger: Logger | None = None


def get_logger() -> Logger:
    """Get or create the singleton Logger instance."""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger
