"""Rich formatting utilities for terminal output."""

from datetime import timedelta

from humanize import naturalsize, precisedelta
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..common.constants import NO_DUPLICATES_MESSAGE
from ..detector.models import ScanReport

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[red]✗[/red] {escape(message)}", style="red", soft_wrap=True)


def print_panel(title: str, content: str, style: str = "blue") -> None:
    """Print content in a panel.

    Args:
        title: Panel title
        content: Panel content
        style: Panel border style
    """
    console.print(Panel(content, title=title, border_style=style, expand=False))


def format_mb_kb(report: ScanReport) -> str:
    """Scanned bytes as whole megabytes plus remaining kilobytes."""
    mb, kb = report.total_bytes_mb_kb
    return f"{mb} MB {kb} KB"


def format_elapsed(seconds: float) -> str:
    """Human-readable wall-clock duration."""
    return precisedelta(timedelta(seconds=seconds), minimum_unit="milliseconds")


def print_groups(report: ScanReport) -> None:
    """Print every duplicate group with its digest and member paths."""
    console.print("[bold]Duplicate files found:[/bold]")

    for group in report.groups:
        console.print()
        console.print(
            f"[cyan]Hash: {group.digest}[/cyan] "
            f"({group.count} files, {naturalsize(group.size, binary=True)} each)",
            soft_wrap=True,
        )
        for path in group.paths:
            console.print(f"  {escape(path)}", soft_wrap=True)


def print_report(report: ScanReport) -> None:
    """Print the full text report: groups (or the all-unique message) and summary."""
    if report.has_duplicates:
        print_groups(report)
    else:
        print_success(NO_DUPLICATES_MESSAGE)

    summary_text = f"""
Files scanned: {report.stats.files_scanned:,}
Total files size sum: {format_mb_kb(report)}
Files hashed: {report.hashed_files:,}
Duplicate groups: {len(report.groups):,}
Reclaimable space: {naturalsize(report.wasted_size, binary=True)}
Time taken: {format_elapsed(report.elapsed)}
"""

    console.print()
    print_panel("Scan Summary", summary_text.strip(), style="green")
