"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars and formatted messages.
"""


from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

from varsweep.domain import Axis
from varsweep.utils import RunStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

MAX_LISTED_INDICES = 12


def create_progress() -> Progress:
    """Create a rich progress bar for coordinate batches.

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
    console.print(f"\n[bold]Varsweep[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(
    side: str,
    font_path: str,
    font_type: str,
    glyph_count: int,
    upm: int,
    axes: list[Axis],
) -> None:
    """Print information about one of the two fonts.

    Args:
        side: "left" or "right"
        font_path: Path to the font file
        font_type: Font format type (e.g., "TrueType", "OpenType")
        glyph_count: Total number of glyphs in font
        upm: Units per em value
        axes: Variation axes of the font
    """
    # Use Text to safely handle paths with special characters
    line1 = Text(f"  {side:<6}")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)

    axes_str = " ".join(f"{a.tag}[{a.min:g},{a.default:g},{a.max:g}]" for a in axes)
    console.print(
        f"        {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM {SYM_DOT} "
        f"{axes_str or 'no axes'}",
        markup=False,
        highlight=False,
    )


def print_run_info(strategy: str, workers: int, is_auto: bool = False) -> None:
    """Print run configuration.

    Args:
        strategy: Constellation strategy name
        workers: Number of parallel workers
        is_auto: Whether the worker count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(
        f"  {strategy} constellation {SYM_DOT} "
        f"{workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel"
    )


def print_only_glyphs(only_left: list[str], only_right: list[str]) -> None:
    """Print glyphs that exist in only one of the fonts."""
    for name in only_left:
        console.print(f"  [yellow]only_left[/yellow] {name}", highlight=False)
    for name in only_right:
        console.print(f"  [yellow]only_right[/yellow] {name}", highlight=False)


def print_glyph_failures(stats: RunStats) -> None:
    """Print one line per failing glyph with its failing coordinate indices."""
    for name, indices in stats.failing_glyphs():
        shown = ", ".join(str(i) for i in indices[:MAX_LISTED_INDICES])
        if len(indices) > MAX_LISTED_INDICES:
            shown += f", {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(indices) - MAX_LISTED_INDICES} more)"
        line = Text(f"  {SYM_ERR} ", style="red")
        line.append(name, style="bold")
        line.append(
            f" fails at {len(indices)}/{stats.constellation_size} locations: {shown}",
            style="default",
        )
        console.print(line)


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


def print_summary(stats: RunStats, output_dir: str) -> None:
    """Print the final pass/fail summary.

    Args:
        stats: Statistics of the finished run
        output_dir: Directory artifacts were written to
    """
    time_str = _format_time(stats.duration_seconds)
    failing_glyphs = len(stats.failing_glyphs())
    passing_glyphs = stats.glyph_count - failing_glyphs

    if stats.succeeded:
        console.print(f"\n[bold green]{SYM_OK} All outlines match[/bold green] in {time_str}")
    else:
        console.print(
            f"\n[bold red]{SYM_ERR} {stats.failed_count} failures[/bold red] in {time_str}"
        )

    console.print(
        f"  {passing_glyphs} glyphs pass {SYM_DOT} {failing_glyphs} glyphs fail {SYM_DOT} "
        f"{stats.unit_count} comparisons"
    )
    console.print(
        f"  {stats.constellation_size} coordinates x {stats.glyph_count} glyphs"
    )

    if stats.inconclusive_count:
        console.print(f"  [yellow]{stats.inconclusive_count} inconclusive[/yellow]")
    if stats.artifact_error_count:
        console.print(f"  [red]{stats.artifact_error_count} artifacts could not be written[/red]")

    if stats.artifacts:
        line = Text(f"  {len(stats.artifacts)} artifacts in ")
        line.append(output_dir, style="bold")
        console.print(line)


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
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress coordinates")


def print_cancellation_summary(completed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        completed: Number of units compared before cancellation
        cancelled: Number of pending coordinate batches that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(
        f"  {completed} comparisons completed {SYM_DOT} {cancelled} coordinates cancelled"
    )
