"""Logging utilities for Varsweep."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog

from varsweep.domain import ComparisonResult

_FILE_HANDLER_NAME = "varsweep-file"
_CONSOLE_HANDLER_NAME = "varsweep-console"


@dataclass
class RunStats:
    """Statistics from a comparison run."""

    passed_count: int = 0
    failed_count: int = 0
    inconclusive_count: int = 0
    artifact_error_count: int = 0
    constellation_size: int = 0
    glyph_count: int = 0
    failures: dict[str, list[int]] = field(default_factory=lambda: defaultdict(list))
    only_left: list[str] = field(default_factory=list)
    only_right: list[str] = field(default_factory=list)
    artifacts: list[Path] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def unit_count(self) -> int:
        """Number of (coordinate, glyph) units that produced a verdict."""
        return self.passed_count + self.failed_count

    @property
    def succeeded(self) -> bool:
        """True iff no unit failed."""
        return self.failed_count == 0 and not self.was_cancelled

    def failing_glyphs(self) -> list[tuple[str, list[int]]]:
        """Failing glyphs with their sorted coordinate indices, by glyph name."""
        return [
            (name, sorted(indices))
            for name, indices in sorted(self.failures.items())
            if indices
        ]


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
    log_dir: Path | None = None,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors
        log_dir: Directory for the auto-generated log file

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = (log_dir or Path(".")) / f"varsweep_{timestamp}.log"

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() in (_FILE_HANDLER_NAME, _CONSOLE_HANDLER_NAME):
            root_logger.removeHandler(handler)
            handler.close()

    root_logger.setLevel(logging.DEBUG)

    file_error: OSError | None = None
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as e:
        file_error = e
    else:
        file_handler.set_name(_FILE_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_CONSOLE_HANDLER_NAME)
    console_handler.setLevel(
        logging.ERROR if quiet else getattr(logging, console_level.upper())
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("varsweep")
    if file_error is not None:
        logger.warning(
            "Log file unavailable, file logging disabled",
            log_file=str(log_file),
            error=str(file_error),
        )
    else:
        logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class RunLogger:
    """Logger for tracking comparison outcomes and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, stats: RunStats | None = None) -> None:
        self._logger = logger
        self._stats = stats if stats is not None else RunStats()

    def log_coordinate_start(self, index: int, label: str, glyph_count: int) -> None:
        """Log start of a coordinate batch."""
        self._logger.debug(
            "Comparing coordinate", index=index, coordinate=label, glyphs=glyph_count
        )

    def log_result(self, result: ComparisonResult) -> None:
        """Record the verdict of a single unit."""
        if result.passed:
            self._logger.debug(
                "Unit passed",
                glyph=result.glyph_name,
                index=result.coordinate_index,
            )
            self._stats.passed_count += 1
            return

        self._logger.info(
            "Unit failed",
            glyph=result.glyph_name,
            index=result.coordinate_index,
            coordinate=result.coordinate.label(),
            kind=result.failure_kind.value if result.failure_kind else None,
            detail=result.describe(),
        )
        self._stats.failed_count += 1
        if result.is_inconclusive:
            self._stats.inconclusive_count += 1
        self._stats.failures[result.glyph_name].append(result.coordinate_index)

    def log_batch_error(
        self,
        index: int,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log a coordinate batch that failed at the executor level."""
        self._logger.error(
            "Coordinate batch failed",
            index=index,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )

    def log_artifact(self, path: Path) -> None:
        """Log a written artifact."""
        self._logger.debug("Artifact written", path=str(path))
        self._stats.artifacts.append(path)

    def log_artifact_error(self, error: Exception) -> None:
        """Log an artifact that could not be written."""
        self._logger.error(
            "Artifact write failed",
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.artifact_error_count += 1

    @property
    def stats(self) -> RunStats:
        """Get current run statistics."""
        return self._stats
