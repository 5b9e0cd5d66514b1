"""Configuration settings for Varsweep."""

import tempfile
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class ConstellationStrategy(str, Enum):
    """How coordinates are sampled from the variation space."""

    EXTREMES = "extremes"
    GRID = "grid"


class ConstellationConfig(BaseModel):
    """Configuration for constellation generation."""

    strategy: ConstellationStrategy = Field(
        default=ConstellationStrategy.EXTREMES,
        description="Sampling strategy (extremes = 2n+3 coordinates, grid = stepped product)",
    )
    grid_steps: dict[str, float] = Field(
        default_factory=lambda: {
            "FILL": 1.0,
            "GRAD": 25.0,
            "ROND": 50.0,
            "opsz": 16.0,
            "wght": 200.0,
        },
        description="Grid step per axis tag",
    )
    grid_divisions: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Number of grid steps for axes without an explicit step",
    )


class ComparisonConfig(BaseModel):
    """Configuration for outline comparison."""

    epsilon: float = Field(
        default=0.01,
        ge=0.0,
        le=100.0,
        description="Maximum point distance (font units) still considered equal",
    )
    canonicalize_contours: bool = Field(
        default=False,
        description="Normalize contour start point and winding before comparing",
    )


class ArtifactConfig(BaseModel):
    """Configuration for rendered artifacts."""

    output_dir: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()),
        description="Staging directory for artifacts",
    )
    render_passes: bool = Field(
        default=False,
        description="Also render a combined image for every passing unit",
    )
    write_segments: bool = Field(
        default=True,
        description="Write a .segments point dump next to each failure image",
    )
    confirmation_scenario: str = Field(
        default="all",
        description="Scenario name of the combined image written when the run passes",
    )
    margin: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Margin around the outline, as a fraction of UPM",
    )


class ProcessingConfig(BaseModel):
    """Configuration for the comparison run."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto, 1 = in-process)",
    )
    glyph_filter: str | None = Field(
        default=None,
        description="Regular expression selecting glyph names to compare",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class VarsweepSettings(BaseModel):
    """Main application settings."""

    constellation: ConstellationConfig = Field(default_factory=ConstellationConfig)
    comparison: ComparisonConfig = Field(default_factory=ComparisonConfig)
    artifacts: ArtifactConfig = Field(default_factory=ArtifactConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> VarsweepSettings:
    """Get default application settings."""
    return VarsweepSettings()
