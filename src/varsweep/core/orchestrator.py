"""Parallel orchestration of a comparison run.

This module drives the full {coordinate} x {glyph} product. Each coordinate
of the constellation is one batch of work: the worker instances both fonts
at that coordinate once and compares every glyph. Batches run in worker
processes using ProcessPoolExecutor; artifacts are written by the parent as
batches complete, named by constellation index rather than arrival order.

Key components:
- compare_unit: Extract and compare one glyph at one coordinate
- compare_coordinate: Compare every glyph at one coordinate
- RunOrchestrator: Main orchestrator class for a comparison run
"""

import re
import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from varsweep.config import ComparisonConfig, VarsweepSettings
from varsweep.core.axes import check_axes_match, read_axes
from varsweep.core.comparator import PathComparator
from varsweep.core.constellation import generate_constellation
from varsweep.core.renderer import ArtifactRenderer
from varsweep.domain import ComparisonResult, Coordinate, FailureKind, Outline, Verdict
from varsweep.exceptions import (
    ArtifactWriteError,
    ConfigurationError,
    GlyphNotFoundError,
    OutlineExtractionError,
)
from varsweep.io import FontReader
from varsweep.utils import RunLogger, RunStats, configure_logging

ProgressCallback = Callable[[int, int, str, int], None]

# Fonts opened once per worker process by _init_worker
_worker_readers: tuple[FontReader, FontReader] | None = None


def compare_unit(
    left_reader: FontReader,
    right_reader: FontReader,
    index: int,
    coordinate: Coordinate,
    glyph_name: str,
    comparator: PathComparator,
    keep_passing: bool = False,
) -> ComparisonResult:
    """Extract one glyph from both fonts at a coordinate and compare.

    A glyph missing from one font, or an outline that cannot be drawn,
    becomes a failed result rather than an exception.

    Args:
        left_reader: Loaded left font
        right_reader: Loaded right font
        index: Position of the coordinate in the constellation
        coordinate: Coordinate to instance both fonts at
        glyph_name: Glyph to compare
        comparator: Configured path comparator
        keep_passing: Keep outlines on passing results (for pass artifacts)

    Returns:
        ComparisonResult for this unit
    """
    outlines: dict[str, Outline | None] = {"left": None, "right": None}
    missing: list[str] = []
    errors: list[str] = []

    for side, reader in (("left", left_reader), ("right", right_reader)):
        try:
            outlines[side] = reader.outline(coordinate, glyph_name)
        except GlyphNotFoundError:
            missing.append(side)
        except OutlineExtractionError as e:
            errors.append(f"{side}: {e.reason}")

    left, right = outlines["left"], outlines["right"]

    if missing or errors:
        if errors:
            kind = FailureKind.EXTRACTION_ERROR
        elif "left" in missing:
            kind = FailureKind.MISSING_LEFT
        else:
            kind = FailureKind.MISSING_RIGHT

        message = "; ".join(errors) if errors else f"glyph not in {' or '.join(missing)} font"
        return ComparisonResult(
            glyph_name=glyph_name,
            coordinate_index=index,
            coordinate=coordinate,
            verdict=Verdict.FAIL,
            failure_kind=kind,
            message=message,
            left=left,
            right=right,
        )

    result = comparator.compare(left, right, coordinate, index)  # type: ignore[arg-type]
    if result.passed and not keep_passing:
        return result.without_outlines()
    return result


def compare_coordinate(
    left_reader: FontReader,
    right_reader: FontReader,
    index: int,
    coordinate: Coordinate,
    glyph_names: list[str],
    comparator: PathComparator,
    keep_passing: bool = False,
) -> list[ComparisonResult]:
    """Compare every glyph at one coordinate, in glyph order."""
    return [
        compare_unit(
            left_reader,
            right_reader,
            index,
            coordinate,
            glyph_name,
            comparator,
            keep_passing,
        )
        for glyph_name in glyph_names
    ]


def _init_worker(left_path: str, right_path: str) -> None:
    """Open both fonts once in a worker process."""
    global _worker_readers

    left = FontReader(Path(left_path))
    left.load()
    right = FontReader(Path(right_path))
    right.load()
    _worker_readers = (left, right)


def _compare_in_worker(
    index: int,
    coordinate_dict: dict[str, Any],
    glyph_names: list[str],
    config_dict: dict[str, Any],
    keep_passing: bool,
) -> list[dict[str, Any]]:
    """Picklable entry point for ProcessPoolExecutor.

    Returns:
        Serialized ComparisonResults (from ComparisonResult.to_dict())
    """
    if _worker_readers is None:
        raise RuntimeError("Worker fonts not loaded")

    left_reader, right_reader = _worker_readers
    results = compare_coordinate(
        left_reader,
        right_reader,
        index,
        Coordinate.from_dict(coordinate_dict),
        glyph_names,
        PathComparator(ComparisonConfig(**config_dict)),
        keep_passing,
    )
    return [r.to_dict() for r in results]


def union_glyph_names(
    left: list[str],
    right: list[str],
) -> tuple[list[str], list[str], list[str]]:
    """Union of two glyph name lists.

    Returns:
        (all names: left order then right-only names in right order,
         names only in left, names only in right)
    """
    left_set = set(left)
    right_set = set(right)
    only_left = [name for name in left if name not in right_set]
    only_right = [name for name in right if name not in left_set]
    return left + only_right, only_left, only_right


class RunOrchestrator:
    """Orchestrates a comparison run between two variable fonts.

    Manages the complete workflow:
    1. Load both fonts and validate their axes (fatal on error)
    2. Generate the constellation
    3. Build the union of both glyph sets
    4. Compare every (coordinate, glyph) unit, in parallel
    5. Render failure artifacts, or a confirmation sheet if all passed

    Example:
        settings = VarsweepSettings()
        orchestrator = RunOrchestrator(settings)
        stats = orchestrator.run(Path("left.ttf"), Path("right.ttf"))
        sys.exit(0 if stats.succeeded else 1)
    """

    def __init__(self, config: VarsweepSettings) -> None:
        """Initialize the orchestrator with configuration.

        Args:
            config: Varsweep settings
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            log_dir=config.artifacts.output_dir,
        )
        self.comparator = PathComparator(config.comparison)
        self.stats: RunStats | None = None

    def _glyph_filter(self) -> re.Pattern[str] | None:
        pattern = self.config.processing.glyph_filter
        if pattern is None:
            return None
        try:
            return re.compile(pattern)
        except re.error as e:
            raise ConfigurationError(f"Invalid glyph filter '{pattern}': {e}") from e

    def run(
        self,
        left_path: Path,
        right_path: Path,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> RunStats:
        """Compare two fonts across the constellation.

        Args:
            left_path: Path to the left (reference) font
            right_path: Path to the right font
            max_workers: Maximum worker processes (None = config, 1 = in-process)
            progress_callback: Optional callback(completed, total, coordinate_label,
                failures_in_batch) called after each coordinate

        Returns:
            RunStats with verdict counts and failing units

        Raises:
            FontLoadError: If either font cannot be loaded
            AxisParseError: If either font has no or malformed axes
            AxisMismatchError: If the fonts declare different axis tags
            ConfigurationError: If the glyph filter is not a valid regex
            KeyboardInterrupt: If the run is cancelled by the user
        """
        stats = RunStats()
        stats.start_time = time.time()
        self.stats = stats
        run_logger = RunLogger(self.logger, stats)

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        pattern = self._glyph_filter()

        self.logger.info(
            "Starting comparison run",
            left=str(left_path),
            right=str(right_path),
            max_workers=max_workers,
        )

        left_reader = FontReader(left_path)
        left_reader.load()
        right_reader = FontReader(right_path)

        try:
            right_reader.load()

            left_axes = read_axes(left_reader)
            right_axes = read_axes(right_reader)
            differing = check_axes_match(left_axes, right_axes)
            if differing:
                self.logger.warning("Inconsistent axis ranges", axes=differing)

            constellation = generate_constellation(
                left_axes, right_axes, self.config.constellation
            )

            glyph_names, stats.only_left, stats.only_right = union_glyph_names(
                left_reader.glyph_names(pattern),
                right_reader.glyph_names(pattern),
            )
            stats.constellation_size = len(constellation)
            stats.glyph_count = len(glyph_names)

            self.logger.info(
                "Run prepared",
                axes=[a.tag for a in left_axes],
                coordinates=len(constellation),
                glyphs=len(glyph_names),
                only_left=len(stats.only_left),
                only_right=len(stats.only_right),
            )

            renderer = ArtifactRenderer(
                self.config.artifacts,
                units_per_em=max(left_reader.units_per_em, right_reader.units_per_em),
            )
            confirmation_pairs: list[tuple[Outline, Outline]] = []

            def handle_batch(results: list[ComparisonResult]) -> int:
                return self._handle_batch(results, renderer, run_logger, confirmation_pairs)

            if not glyph_names:
                self.logger.warning("No glyphs to compare")
            elif max_workers == 1:
                self._run_serial(
                    left_reader,
                    right_reader,
                    constellation,
                    glyph_names,
                    run_logger,
                    handle_batch,
                    progress_callback,
                )
            else:
                self._run_parallel(
                    left_path,
                    right_path,
                    constellation,
                    glyph_names,
                    max_workers,
                    run_logger,
                    handle_batch,
                    progress_callback,
                )

            if stats.succeeded and confirmation_pairs:
                try:
                    run_logger.log_artifact(renderer.render_confirmation(confirmation_pairs))
                except ArtifactWriteError as e:
                    run_logger.log_artifact_error(e)

        finally:
            left_reader.close()
            right_reader.close()

        stats.artifacts.sort()
        stats.end_time = time.time()

        self.logger.info(
            "Run complete",
            passed=stats.passed_count,
            failed=stats.failed_count,
            inconclusive=stats.inconclusive_count,
            artifact_errors=stats.artifact_error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _keep_passing(self, index: int) -> bool:
        # The default coordinate feeds the confirmation sheet
        return index == 0 or self.config.artifacts.render_passes

    def _handle_batch(
        self,
        results: list[ComparisonResult],
        renderer: ArtifactRenderer,
        run_logger: RunLogger,
        confirmation_pairs: list[tuple[Outline, Outline]],
    ) -> int:
        """Record a batch of results and render their artifacts.

        Returns:
            Number of failed units in the batch
        """
        failures = 0
        for result in results:
            run_logger.log_result(result)

            try:
                if not result.passed:
                    failures += 1
                    for path in renderer.render_failure(result):
                        run_logger.log_artifact(path)
                elif self.config.artifacts.render_passes:
                    run_logger.log_artifact(renderer.render_pass(result))
            except ArtifactWriteError as e:
                run_logger.log_artifact_error(e)

            if (
                result.passed
                and result.coordinate_index == 0
                and result.left is not None
                and result.right is not None
            ):
                confirmation_pairs.append((result.left, result.right))

        return failures

    def _run_serial(
        self,
        left_reader: FontReader,
        right_reader: FontReader,
        constellation: list[Coordinate],
        glyph_names: list[str],
        run_logger: RunLogger,
        handle_batch: Callable[[list[ComparisonResult]], int],
        progress_callback: ProgressCallback | None,
    ) -> None:
        """Compare all coordinates in this process."""
        total = len(constellation)
        for index, coordinate in enumerate(constellation):
            run_logger.log_coordinate_start(index, coordinate.label(), len(glyph_names))
            try:
                results = compare_coordinate(
                    left_reader,
                    right_reader,
                    index,
                    coordinate,
                    glyph_names,
                    self.comparator,
                    self._keep_passing(index),
                )
            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                run_logger.stats.was_cancelled = True
                run_logger.stats.cancelled_count = total - index
                raise

            failures = handle_batch(results)
            if progress_callback is not None:
                progress_callback(index + 1, total, coordinate.label(), failures)

    def _run_parallel(
        self,
        left_path: Path,
        right_path: Path,
        constellation: list[Coordinate],
        glyph_names: list[str],
        max_workers: int | None,
        run_logger: RunLogger,
        handle_batch: Callable[[list[ComparisonResult]], int],
        progress_callback: ProgressCallback | None,
    ) -> None:
        """Compare coordinates in worker processes.

        A batch that fails at the executor level turns every unit of that
        coordinate into an extraction error; the run continues.
        """
        config_dict = self.config.comparison.model_dump()
        total = len(constellation)
        completed = 0
        pending_futures: dict = {}

        self.logger.info(
            "Starting parallel comparison",
            coordinates=total,
            max_workers=max_workers,
        )

        with ProcessPoolExecutor(
            max_workers=max_workers,
            initializer=_init_worker,
            initargs=(str(left_path), str(right_path)),
        ) as executor:
            for index, coordinate in enumerate(constellation):
                future = executor.submit(
                    _compare_in_worker,
                    index,
                    coordinate.to_dict(),
                    glyph_names,
                    config_dict,
                    self._keep_passing(index),
                )
                pending_futures[future] = index

            try:
                for future in as_completed(pending_futures):
                    index = pending_futures.pop(future)
                    coordinate = constellation[index]

                    try:
                        results = [ComparisonResult.from_dict(d) for d in future.result()]
                    except Exception as e:
                        run_logger.log_batch_error(index, e, traceback.format_exc())
                        results = [
                            ComparisonResult(
                                glyph_name=name,
                                coordinate_index=index,
                                coordinate=coordinate,
                                verdict=Verdict.FAIL,
                                failure_kind=FailureKind.EXTRACTION_ERROR,
                                message=str(e),
                            )
                            for name in glyph_names
                        ]

                    failures = handle_batch(results)

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, coordinate.label(), failures)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                run_logger.stats.was_cancelled = True
                run_logger.stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise
