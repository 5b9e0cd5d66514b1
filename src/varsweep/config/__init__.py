"""Configuration management for varsweep.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ConstellationConfig: Coordinate sampling settings
- ComparisonConfig: Outline comparison tolerances
- ArtifactConfig: Rendered artifact settings
- ProcessingConfig: Run and worker settings
- LoggingConfig: Logging settings
- VarsweepSettings: Main application settings
"""

from varsweep.config.settings import (
    ArtifactConfig,
    ComparisonConfig,
    ConstellationConfig,
    ConstellationStrategy,
    LoggingConfig,
    ProcessingConfig,
    VarsweepSettings,
    get_default_settings,
)

__all__ = [
    "ArtifactConfig",
    "ComparisonConfig",
    "ConstellationConfig",
    "ConstellationStrategy",
    "LoggingConfig",
    "ProcessingConfig",
    "VarsweepSettings",
    "get_default_settings",
]
