"""CLI application entry point for varsweep.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from varsweep import __version__
from varsweep.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_font_info,
    print_glyph_failures,
    print_header,
    print_only_glyphs,
    print_run_info,
    print_step,
    print_summary,
)
from varsweep.config import (
    ArtifactConfig,
    ComparisonConfig,
    ConstellationConfig,
    ConstellationStrategy,
    LoggingConfig,
    ProcessingConfig,
    VarsweepSettings,
)
from varsweep.core import RunOrchestrator
from varsweep.exceptions import (
    AxisError,
    FontLoadError,
    VarsweepError,
)
from varsweep.io import FontReader

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_FATAL = 2
EXIT_CANCELLED = 130  # Standard Unix SIGINT exit code

# Create the Typer app
app = typer.Typer(
    name="varsweep",
    help="Compare glyph outlines of two variable fonts across their variation space.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Varsweep[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def compare(
    left_font: Annotated[
        Path,
        typer.Argument(
            help="Path to the left (reference) variable font",
            show_default=False,
        ),
    ],
    right_font: Annotated[
        Path,
        typer.Argument(
            help="Path to the right variable font",
            show_default=False,
        ),
    ],
    glyph_filter: Annotated[
        str | None,
        typer.Option(
            "--filter",
            "-f",
            help="Regular expression selecting glyph names to compare",
        ),
    ] = None,
    strategy: Annotated[
        str,
        typer.Option(
            "--strategy",
            "-s",
            help="Coordinate sampling strategy (extremes|grid)",
        ),
    ] = "extremes",
    epsilon: Annotated[
        float,
        typer.Option(
            "--epsilon",
            "-e",
            help="Maximum point distance in font units still considered equal",
            min=0.0,
        ),
    ] = 0.01,
    canonicalize: Annotated[
        bool,
        typer.Option(
            "--canonicalize",
            help="Ignore contour start point and winding direction when comparing",
        ),
    ] = False,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for artifacts (default: system temp directory)",
        ),
    ] = None,
    render_passes: Annotated[
        bool,
        typer.Option(
            "--render-passes",
            help="Also write a combined image for every passing comparison",
        ),
    ] = False,
    segments: Annotated[
        bool,
        typer.Option(
            "--segments/--no-segments",
            help="Write a .segments point dump next to each failure image",
        ),
    ] = True,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto, 1 = no subprocesses)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Compare the glyph outlines of two variable fonts.

    Every glyph present in either font is drawn from both fonts at the
    default coordinate, at each axis's min and max, and at the all-min and
    all-max corners. Any outline that differs is reported and written as
    fail.{glyph}.{left|right}.{index}.svg to the output directory.

    Example:
        varsweep Icons-fontmake.ttf Icons-fontc.ttf

    Exits 0 when every outline matches, 1 when any differs, and 2 when the
    fonts cannot be compared at all.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=EXIT_FATAL)

    for font_path in (left_font, right_font):
        if not font_path.exists():
            print_error(
                f"Input file not found: {font_path}",
                details=f"The file '{font_path}' does not exist or is not accessible.",
            )
            raise typer.Exit(code=EXIT_FATAL)

        if not font_path.is_file():
            print_error(
                f"Input path is not a file: {font_path}",
                details="Please provide a path to a TTF or OTF variable font file.",
            )
            raise typer.Exit(code=EXIT_FATAL)

    # Validate strategy argument
    try:
        strategy_choice = ConstellationStrategy(strategy.lower())
    except ValueError:
        print_error(
            f"Invalid strategy: {strategy}",
            details="Valid values: extremes, grid",
        )
        raise typer.Exit(code=EXIT_FATAL)

    if not quiet:
        print_header(__version__)

    artifacts = ArtifactConfig(render_passes=render_passes, write_segments=segments)
    if output_dir is not None:
        artifacts.output_dir = output_dir

    # Create settings from CLI arguments
    settings = VarsweepSettings(
        constellation=ConstellationConfig(strategy=strategy_choice),
        comparison=ComparisonConfig(
            epsilon=epsilon,
            canonicalize_contours=canonicalize,
        ),
        artifacts=artifacts,
        processing=ProcessingConfig(
            max_workers=workers,
            glyph_filter=glyph_filter,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    orchestrator: RunOrchestrator | None = None

    try:
        if not quiet:
            print_step("Loading fonts")
            for side, font_path in (("left", left_font), ("right", right_font)):
                _print_font(side, font_path)

        orchestrator = RunOrchestrator(settings)

        if not quiet:
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Comparing")
            print_run_info(strategy_choice.value, actual_workers, is_auto=(workers is None))

            with create_progress() as progress:
                task_id = progress.add_task("Comparing", total=None)

                def update_progress(completed: int, total: int, *_: object) -> None:
                    progress.update(task_id, completed=completed, total=total)

                stats = orchestrator.run(
                    left_path=left_font,
                    right_path=right_font,
                    max_workers=workers,
                    progress_callback=update_progress,
                )
        else:
            stats = orchestrator.run(
                left_path=left_font,
                right_path=right_font,
                max_workers=workers,
            )

    except KeyboardInterrupt:
        stats = orchestrator.stats if orchestrator else None
        if not quiet:
            print_cancellation_notice()
            print_cancellation_summary(
                completed=stats.unit_count if stats else 0,
                cancelled=stats.cancelled_count if stats else 0,
            )
        raise typer.Exit(code=EXIT_CANCELLED) from None
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}", details=e.path)
        raise typer.Exit(code=EXIT_FATAL)
    except AxisError as e:
        print_error(str(e), details="Both fonts must be variable fonts with the same axes.")
        raise typer.Exit(code=EXIT_FATAL)
    except VarsweepError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_FATAL)

    print_only_glyphs(stats.only_left, stats.only_right)
    print_glyph_failures(stats)

    if verbose:
        for path in stats.artifacts:
            console.print(f"  {path}", highlight=False)

    if not quiet or not stats.succeeded:
        print_summary(stats, str(settings.artifacts.output_dir))

    raise typer.Exit(code=EXIT_OK if stats.succeeded else EXIT_MISMATCH)


def _print_font(side: str, font_path: Path) -> None:
    """Load a font just long enough to print its details.

    Raises:
        FontLoadError: If the font cannot be loaded
    """
    with FontReader(font_path) as reader:
        print_font_info(
            side=side,
            font_path=str(font_path),
            font_type=reader.format,
            glyph_count=reader.glyph_count,
            upm=reader.units_per_em,
            axes=reader.axes(),
        )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
