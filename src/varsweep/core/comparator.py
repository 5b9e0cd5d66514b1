"""Outline comparison.

Two outlines are equivalent when they have the same number of contours,
each contour has the same number of points with the same on/off-curve
sequence, and every pair of corresponding points lies within ``epsilon``.

The comparison is point-order sensitive: the same closed curve drawn from a
different start point, or in the opposite direction, is reported as a
mismatch even though it renders identically. ``canonicalize_contours``
rewinds and rotates each contour to a canonical form first, which removes
that sensitivity; it is off by default so reports stay comparable with
earlier runs.
"""

import math

from varsweep.config import ComparisonConfig
from varsweep.domain import (
    ComparisonResult,
    Contour,
    Coordinate,
    DifferenceKind,
    FailureKind,
    Outline,
    PathDifference,
    Verdict,
    WindingDirection,
)


def canonicalize_contour(contour: Contour) -> Contour:
    """Rewind to counter-clockwise and rotate to the minimal starting point.

    The start is the lexicographically smallest (x, y). When that point occurs
    more than once, the rotation whose whole (x, y, type) sequence is smallest
    wins, so the result does not depend on where the contour started.
    """
    if not contour.points:
        return contour

    if contour.direction == WindingDirection.CLOCKWISE:
        contour = contour.reversed()

    keys = [(p.x, p.y, p.point_type.value) for p in contour.points]
    smallest = min(key[:2] for key in keys)
    candidates = [i for i, key in enumerate(keys) if key[:2] == smallest]
    start = min(candidates, key=lambda i: keys[i:] + keys[:i])
    return contour.rotated(start)


def find_difference(
    left: Outline,
    right: Outline,
    epsilon: float,
    canonicalize: bool = False,
) -> PathDifference | None:
    """Find the first difference between two outlines.

    Args:
        left: Left outline
        right: Right outline
        epsilon: Maximum distance between corresponding points
        canonicalize: Normalize contour start point and winding first

    Returns:
        The first difference found, or None if the outlines are equivalent
    """
    if len(left.contours) != len(right.contours):
        return PathDifference(
            kind=DifferenceKind.CONTOUR_COUNT,
            magnitude=abs(len(left.contours) - len(right.contours)),
            left=len(left.contours),
            right=len(right.contours),
        )

    for contour_idx, (left_contour, right_contour) in enumerate(
        zip(left.contours, right.contours)
    ):
        if canonicalize:
            left_contour = canonicalize_contour(left_contour)
            right_contour = canonicalize_contour(right_contour)

        if len(left_contour) != len(right_contour):
            return PathDifference(
                kind=DifferenceKind.POINT_COUNT,
                contour_index=contour_idx,
                magnitude=abs(len(left_contour) - len(right_contour)),
                left=len(left_contour),
                right=len(right_contour),
            )

        for point_idx, (lp, rp) in enumerate(zip(left_contour.points, right_contour.points)):
            if lp.point_type != rp.point_type:
                return PathDifference(
                    kind=DifferenceKind.POINT_TYPE,
                    contour_index=contour_idx,
                    point_index=point_idx,
                    left=lp.point_type.value,
                    right=rp.point_type.value,
                )

            distance = math.hypot(lp.x - rp.x, lp.y - rp.y)
            if distance > epsilon:
                return PathDifference(
                    kind=DifferenceKind.POINT_POSITION,
                    contour_index=contour_idx,
                    point_index=point_idx,
                    magnitude=distance,
                    left=lp.to_tuple(),
                    right=rp.to_tuple(),
                )

    return None


class PathComparator:
    """Compares left and right outlines of the same glyph at the same coordinate.

    Example:
        comparator = PathComparator(ComparisonConfig(epsilon=0.5))
        result = comparator.compare(left, right, coordinate, index=0)
        if not result.passed:
            print(result.describe())
    """

    def __init__(self, config: ComparisonConfig | None = None) -> None:
        self.config = config or ComparisonConfig()

    def compare(
        self,
        left: Outline,
        right: Outline,
        coordinate: Coordinate,
        index: int,
    ) -> ComparisonResult:
        """Compare two outlines and produce a verdict.

        Both outlines are attached to the result; the caller drops them
        once it has decided which artifacts to render.

        Args:
            left: Outline from the left font
            right: Outline from the right font
            coordinate: Coordinate both outlines were drawn at
            index: Position of the coordinate in the constellation

        Returns:
            ComparisonResult with PASS or a MISMATCH failure
        """
        detail = find_difference(
            left,
            right,
            self.config.epsilon,
            self.config.canonicalize_contours,
        )

        if detail is None:
            return ComparisonResult(
                glyph_name=left.glyph_name,
                coordinate_index=index,
                coordinate=coordinate,
                verdict=Verdict.PASS,
                left=left,
                right=right,
            )

        return ComparisonResult(
            glyph_name=left.glyph_name,
            coordinate_index=index,
            coordinate=coordinate,
            verdict=Verdict.FAIL,
            failure_kind=FailureKind.MISMATCH,
            detail=detail,
            left=left,
            right=right,
        )
