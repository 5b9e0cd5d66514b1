"""Unit tests for the path comparator."""

import pytest

from varsweep.config import ComparisonConfig
from varsweep.core.comparator import PathComparator, canonicalize_contour, find_difference
from varsweep.domain import (
    Contour,
    Coordinate,
    DifferenceKind,
    FailureKind,
    Outline,
    Point,
    PointType,
    Verdict,
    WindingDirection,
)

COORDINATE = Coordinate.from_mapping({"wght": 400})


def contour(*points: tuple[float, float]) -> Contour:
    return Contour(points=tuple(Point(x, y) for x, y in points))


def outline(*contours: Contour, name: str = "A") -> Outline:
    return Outline(glyph_name=name, contours=contours)


SQUARE = contour((0, 0), (100, 0), (100, 100), (0, 100))


class TestFindDifference:
    """Tests for find_difference."""

    def test_identical(self):
        """Test identical outlines have no difference."""
        assert find_difference(outline(SQUARE), outline(SQUARE), 0.01) is None

    def test_empty_outlines_match(self):
        """Test two empty outlines are equivalent."""
        assert find_difference(outline(), outline(), 0.01) is None

    def test_within_epsilon(self):
        """Test points closer than epsilon are equal."""
        nudged = contour((0, 0.005), (100, 0), (100, 100), (0, 100))
        assert find_difference(outline(SQUARE), outline(nudged), 0.01) is None

    def test_beyond_epsilon(self):
        """Test a moved point is reported with its distance."""
        moved = contour((0, 0), (103, 4), (100, 100), (0, 100))
        difference = find_difference(outline(SQUARE), outline(moved), 0.01)

        assert difference is not None
        assert difference.kind == DifferenceKind.POINT_POSITION
        assert difference.contour_index == 0
        assert difference.point_index == 1
        assert difference.magnitude == pytest.approx(5.0)
        assert difference.left == (100, 0)
        assert difference.right == (103, 4)

    def test_contour_count(self):
        """Test a missing contour is a structural difference."""
        difference = find_difference(outline(SQUARE, SQUARE), outline(SQUARE), 0.01)
        assert difference.kind == DifferenceKind.CONTOUR_COUNT
        assert (difference.left, difference.right) == (2, 1)

    def test_point_count(self):
        """Test an extra point is a structural difference."""
        extra = contour((0, 0), (50, 0), (100, 0), (100, 100), (0, 100))
        difference = find_difference(outline(SQUARE), outline(extra), 0.01)
        assert difference.kind == DifferenceKind.POINT_COUNT
        assert (difference.left, difference.right) == (4, 5)

    def test_point_type(self):
        """Test an on-curve point turned off-curve differs even in place."""
        curved = Contour(
            points=(
                Point(0, 0),
                Point(100, 0, PointType.OFF_CURVE_QUAD),
                Point(100, 100),
                Point(0, 100),
            )
        )
        difference = find_difference(outline(SQUARE), outline(curved), 0.01)
        assert difference.kind == DifferenceKind.POINT_TYPE
        assert (difference.left, difference.right) == ("on", "qcurve")

    def test_reversed_winding_differs(self):
        """Test the same square drawn clockwise is a mismatch by default."""
        assert SQUARE.reversed().direction == WindingDirection.CLOCKWISE
        difference = find_difference(outline(SQUARE), outline(SQUARE.reversed()), 0.01)
        assert difference is not None
        assert difference.kind == DifferenceKind.POINT_POSITION

    def test_rotated_start_differs(self):
        """Test the same square from another start point is a mismatch by default."""
        assert find_difference(outline(SQUARE), outline(SQUARE.rotated(1)), 0.01) is not None

    def test_canonicalize_ignores_winding_and_start(self):
        """Test canonicalization removes start point and direction sensitivity."""
        shuffled = SQUARE.reversed().rotated(2)
        assert (
            find_difference(outline(SQUARE), outline(shuffled), 0.01, canonicalize=True)
            is None
        )

    def test_canonicalize_duplicate_points(self):
        """Test a contour with a doubled corner matches its own rotation."""
        doubled = contour((0, 0), (0, 0), (100, 0), (100, 100), (0, 100))
        assert (
            find_difference(
                outline(doubled), outline(doubled.rotated(1)), 0.01, canonicalize=True
            )
            is None
        )

    def test_canonicalize_still_detects_geometry(self):
        """Test canonicalization does not hide real changes."""
        bigger = contour((0, 0), (120, 0), (120, 100), (0, 100))
        assert (
            find_difference(outline(SQUARE), outline(bigger), 0.01, canonicalize=True)
            is not None
        )


class TestCanonicalizeContour:
    """Tests for canonicalize_contour."""

    def test_counter_clockwise_from_smallest_point(self):
        """Test the canonical form winds CCW from the smallest (x, y)."""
        canonical = canonicalize_contour(SQUARE.reversed().rotated(3))

        assert canonical.direction == WindingDirection.COUNTER_CLOCKWISE
        assert canonical.points[0] == Point(0, 0)
        assert canonical == SQUARE

    def test_empty(self):
        """Test an empty contour is returned unchanged."""
        empty = Contour(points=())
        assert canonicalize_contour(empty) == empty

    def test_duplicate_smallest_point(self):
        """Test a repeated smallest point gives one canonical start."""
        doubled = contour((0, 0), (0, 0), (100, 0), (100, 100), (0, 100))

        for start in range(len(doubled.points)):
            assert canonicalize_contour(doubled.rotated(start)) == doubled

    def test_duplicate_point_tie_uses_point_type(self):
        """Test ties between equal positions are broken by the point types that follow."""
        mixed = Contour(
            points=(
                Point(0, 0),
                Point(0, 0, PointType.OFF_CURVE_QUAD),
                Point(100, 0),
                Point(100, 100),
                Point(0, 100),
            )
        )

        first = canonicalize_contour(mixed)
        assert all(canonicalize_contour(mixed.rotated(i)) == first for i in range(5))


class TestPathComparator:
    """Tests for PathComparator."""

    def test_pass(self):
        """Test a passing comparison keeps both outlines."""
        comparator = PathComparator()
        result = comparator.compare(outline(SQUARE), outline(SQUARE), COORDINATE, 4)

        assert result.verdict == Verdict.PASS
        assert result.failure_kind is None
        assert result.coordinate_index == 4
        assert result.left is not None
        assert result.right is not None

    def test_mismatch(self):
        """Test a failing comparison carries the difference."""
        comparator = PathComparator()
        result = comparator.compare(
            outline(SQUARE), outline(SQUARE.reversed()), COORDINATE, 2
        )

        assert result.verdict == Verdict.FAIL
        assert result.failure_kind == FailureKind.MISMATCH
        assert result.detail is not None
        assert "contour 0 point 1" in result.describe()

    def test_epsilon_from_config(self):
        """Test the configured epsilon is used."""
        moved = contour((0, 0), (100.4, 0), (100, 100), (0, 100))
        strict = PathComparator(ComparisonConfig(epsilon=0.1))
        loose = PathComparator(ComparisonConfig(epsilon=0.5))

        assert not strict.compare(outline(SQUARE), outline(moved), COORDINATE, 0).passed
        assert loose.compare(outline(SQUARE), outline(moved), COORDINATE, 0).passed

    def test_canonicalize_from_config(self):
        """Test canonicalization is switched on by config."""
        comparator = PathComparator(ComparisonConfig(canonicalize_contours=True))
        assert comparator.compare(outline(SQUARE), outline(SQUARE.reversed()), COORDINATE, 0).passed

    def test_equivalence_is_symmetric(self):
        """Test swapping sides gives the same verdict."""
        comparator = PathComparator()
        moved = contour((0, 0), (100, 0), (100, 100), (0, 90))

        assert comparator.compare(outline(SQUARE), outline(moved), COORDINATE, 0).passed is False
        assert comparator.compare(outline(moved), outline(SQUARE), COORDINATE, 0).passed is False
