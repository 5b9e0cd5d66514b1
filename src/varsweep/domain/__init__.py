"""Domain models for varsweep.

This module contains the core domain models representing the variation
space, glyph outlines, and comparison verdicts. All models are designed to be:

- Immutable (frozen dataclasses over tuples)
- Serializable for inter-process communication (parallel comparison)
- Independent of fonttools implementation details

Key classes:
- Axis: A variation axis with min/default/max
- Coordinate: A location in variation space
- Point: A 2D point with curve metadata
- Contour: A closed contour of points
- Outline: The contours of one glyph at one coordinate
- PathDifference: First divergence between two outlines
- ComparisonResult: Verdict for one (coordinate, glyph) unit
"""

from varsweep.domain.axis import Axis, Coordinate
from varsweep.domain.outline import Contour, Outline, Point, PointType, WindingDirection
from varsweep.domain.result import (
    ComparisonResult,
    DifferenceKind,
    FailureKind,
    PathDifference,
    Verdict,
)

__all__: list[str] = [
    # Enums
    "WindingDirection",
    "PointType",
    "Verdict",
    "FailureKind",
    "DifferenceKind",
    # Core types
    "Axis",
    "Coordinate",
    "Point",
    "Contour",
    "Outline",
    "PathDifference",
    "ComparisonResult",
]
