"""Comparison verdicts and difference descriptors.

A ComparisonResult is produced for every (coordinate, glyph) unit of a run.
It is consumed immediately by the orchestrator to decide which artifacts to
emit and afterwards only contributes to aggregate statistics.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from varsweep.domain.axis import Coordinate
from varsweep.domain.outline import Outline


class Verdict(Enum):
    """Outcome of comparing one glyph at one coordinate."""

    PASS = "pass"
    FAIL = "fail"


class FailureKind(Enum):
    """Why a unit failed.

    MISMATCH is the ordinary comparator outcome. The other kinds record a
    unit that could not be compared at all.
    """

    MISMATCH = "mismatch"
    MISSING_LEFT = "missing_left"
    MISSING_RIGHT = "missing_right"
    EXTRACTION_ERROR = "extraction_error"

    @property
    def is_inconclusive(self) -> bool:
        return self is FailureKind.EXTRACTION_ERROR


class DifferenceKind(Enum):
    """First structural or geometric difference found between two outlines."""

    CONTOUR_COUNT = "contour_count"
    POINT_COUNT = "point_count"
    POINT_TYPE = "point_type"
    POINT_POSITION = "point_position"


@dataclass(frozen=True, slots=True)
class PathDifference:
    """Describes where two outlines first diverge.

    Attributes:
        kind: What differs
        contour_index: Index of the first differing contour (None for contour count)
        point_index: Index of the first differing point within that contour
        magnitude: Distance between the differing points, or the count delta
        left: Left-side value (count, point type, or (x, y))
        right: Right-side value
    """

    kind: DifferenceKind
    contour_index: int | None = None
    point_index: int | None = None
    magnitude: float = 0.0
    left: Any = None
    right: Any = None

    def describe(self) -> str:
        """One-line human-readable description."""
        if self.kind is DifferenceKind.CONTOUR_COUNT:
            return f"contour count {self.left} != {self.right}"
        if self.kind is DifferenceKind.POINT_COUNT:
            return (
                f"contour {self.contour_index}: point count {self.left} != {self.right}"
            )
        if self.kind is DifferenceKind.POINT_TYPE:
            return (
                f"contour {self.contour_index} point {self.point_index}: "
                f"type {self.left} != {self.right}"
            )
        return (
            f"contour {self.contour_index} point {self.point_index}: "
            f"{self.left} vs {self.right} (off by {self.magnitude:.4g})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "kind": self.kind.value,
            "contour_index": self.contour_index,
            "point_index": self.point_index,
            "magnitude": self.magnitude,
            "left": list(self.left) if isinstance(self.left, tuple) else self.left,
            "right": list(self.right) if isinstance(self.right, tuple) else self.right,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PathDifference":
        """Deserialize from dictionary."""
        left = data["left"]
        right = data["right"]
        return cls(
            kind=DifferenceKind(data["kind"]),
            contour_index=data["contour_index"],
            point_index=data["point_index"],
            magnitude=data["magnitude"],
            left=tuple(left) if isinstance(left, list) else left,
            right=tuple(right) if isinstance(right, list) else right,
        )


@dataclass(frozen=True)
class ComparisonResult:
    """Verdict for one glyph at one constellation coordinate.

    Attributes:
        glyph_name: Glyph that was compared
        coordinate_index: Position of the coordinate in the constellation
        coordinate: The coordinate itself
        verdict: PASS or FAIL
        failure_kind: Why the unit failed (None on PASS)
        detail: Geometric difference for MISMATCH failures
        message: Error text for non-comparator failures
        left: Left outline, kept only when artifacts need it
        right: Right outline, kept only when artifacts need it
    """

    glyph_name: str
    coordinate_index: int
    coordinate: Coordinate
    verdict: Verdict
    failure_kind: FailureKind | None = None
    detail: PathDifference | None = None
    message: str | None = None
    left: Outline | None = field(default=None, repr=False, compare=False)
    right: Outline | None = field(default=None, repr=False, compare=False)

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.PASS

    @property
    def is_inconclusive(self) -> bool:
        return self.failure_kind is not None and self.failure_kind.is_inconclusive

    def describe(self) -> str:
        """Explain the verdict in one line."""
        if self.passed:
            return "pass"
        if self.detail is not None:
            return self.detail.describe()
        if self.message:
            return f"{self.failure_kind.value}: {self.message}"  # type: ignore[union-attr]
        return self.failure_kind.value  # type: ignore[union-attr]

    def without_outlines(self) -> "ComparisonResult":
        """Drop the outlines once artifacts have been produced."""
        return ComparisonResult(
            glyph_name=self.glyph_name,
            coordinate_index=self.coordinate_index,
            coordinate=self.coordinate,
            verdict=self.verdict,
            failure_kind=self.failure_kind,
            detail=self.detail,
            message=self.message,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "glyph_name": self.glyph_name,
            "coordinate_index": self.coordinate_index,
            "coordinate": self.coordinate.to_dict(),
            "verdict": self.verdict.value,
            "failure_kind": self.failure_kind.value if self.failure_kind else None,
            "detail": self.detail.to_dict() if self.detail else None,
            "message": self.message,
            "left": self.left.to_dict() if self.left else None,
            "right": self.right.to_dict() if self.right else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ComparisonResult":
        """Deserialize from dictionary."""
        return cls(
            glyph_name=data["glyph_name"],
            coordinate_index=data["coordinate_index"],
            coordinate=Coordinate.from_dict(data["coordinate"]),
            verdict=Verdict(data["verdict"]),
            failure_kind=(
                FailureKind(data["failure_kind"])
                if data["failure_kind"] is not None
                else None
            ),
            detail=PathDifference.from_dict(data["detail"]) if data["detail"] else None,
            message=data["message"],
            left=Outline.from_dict(data["left"]) if data["left"] else None,
            right=Outline.from_dict(data["right"]) if data["right"] else None,
        )
