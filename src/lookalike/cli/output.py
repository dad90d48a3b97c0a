"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from lookalike.config import RulesOfSimilarity

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for character grouping.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Lookalike[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_inputs(font_count: int, char_count: int) -> None:
    """Print what is about to be compared."""
    console.print(f"  {font_count:,} fonts {SYM_DOT} {char_count:,} test characters")


def print_rules(rules: RulesOfSimilarity, max_upem: int) -> None:
    """Print the rules in effect after UPM scaling.

    Args:
        rules: Scaled rules
        max_upem: UPM every letterform was scaled to
    """
    console.print(
        f"  equivalence {rules.equivalence:g} {SYM_DOT} budget {rules.budget:g} "
        f"{SYM_DOT} error {rules.error:g} (at {max_upem:,} UPM)"
    )


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_char_groups(char: str, groups: Sequence[Sequence[str]]) -> None:
    """Print the groups found for one character (verbose mode).

    Args:
        char: The character
        groups: Sorted source names per group
    """
    console.print(Text(f"  {len(groups)} groups for '{char}'"))
    for i, sources in enumerate(groups):
        console.print(Text(f"    {i}: {', '.join(sources)}"))


def print_matches(
    matches: Sequence[tuple[frozenset[str], int]],
    limit: int,
    total: int,
) -> None:
    """Print the sets of fonts that share enough letterforms.

    Args:
        matches: (sources, score) pairs
        limit: Minimum score shown
        total: Number of test characters
    """
    console.print(f"\nShowing groups where at least {limit}/{total} glyphs match\n")
    if not matches:
        console.print("  No matching groups")
        return

    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Group")
    table.add_column("Score", justify="right")
    for sources, score in matches:
        table.add_row(
            Text("\n".join(sorted(sources))),
            f"{score}/{total}",
        )
    console.print(table)


def print_success(
    total_time_s: float,
    chars: int,
    groups: int,
    inconsistent: int,
    comparisons: int,
) -> None:
    """Print success message with summary.

    Args:
        total_time_s: Total run time in seconds
        chars: Number of characters compared
        groups: Total number of groups across characters
        inconsistent: Characters drawn more than one way
        comparisons: Group membership tests performed
    """
    time_str = _format_time(total_time_s)
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    style = "yellow" if inconsistent > 0 else "green"
    console.print(
        f"  {chars} characters {SYM_DOT} {groups} groups {SYM_DOT} "
        f"[{style}]{inconsistent} inconsistent[/{style}] {SYM_DOT} {comparisons} comparisons"
    )


def print_dumped(kind: str, path: Path) -> None:
    """Print where diagnostic output went."""
    line = Text(f"  {kind} ")
    line.append(str(path), style="bold")
    console.print(line)


def print_warning(message: str) -> None:
    """Print warning message."""
    console.print(f"\n[bold yellow]{SYM_WARN} Warning:[/bold yellow] {message}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print("  No report produced")
