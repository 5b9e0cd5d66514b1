"""Unit tests for axis validation."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from varsweep.core.axes import check_axes_match, read_axes
from varsweep.domain import Axis
from varsweep.exceptions import AxisMismatchError, AxisParseError


def mock_reader(axes: list[Axis]) -> Mock:
    reader = Mock()
    reader.path = Path("font.ttf")
    reader.axes.return_value = axes
    return reader


class TestReadAxes:
    """Tests for read_axes."""

    def test_returns_axes_in_declaration_order(self):
        """Test axes are returned as declared."""
        axes = [Axis("opsz", 8, 14, 144), Axis("wght", 100, 400, 900)]
        assert read_axes(mock_reader(axes)) == axes

    def test_no_axes(self):
        """Test a static font is rejected."""
        with pytest.raises(AxisParseError, match="no variation axes"):
            read_axes(mock_reader([]))

    def test_duplicate_tag(self):
        """Test an axis declared twice is rejected."""
        axes = [Axis("wght", 100, 400, 900), Axis("wght", 100, 400, 900)]
        with pytest.raises(AxisParseError, match="declared twice"):
            read_axes(mock_reader(axes))

    def test_inverted_bounds(self):
        """Test min > max is rejected."""
        with pytest.raises(AxisParseError, match="inverted bounds"):
            read_axes(mock_reader([Axis("wght", 900, 400, 100)]))

    def test_default_outside_range(self):
        """Test a default outside [min, max] is rejected."""
        with pytest.raises(AxisParseError, match="outside"):
            read_axes(mock_reader([Axis("wght", 100, 1000, 900)]))

    def test_error_names_font(self):
        """Test the error carries the font path."""
        with pytest.raises(AxisParseError) as exc_info:
            read_axes(mock_reader([]))
        assert exc_info.value.path == "font.ttf"

    def test_pinned_axis_is_valid(self):
        """Test min == default == max is accepted."""
        axes = [Axis("GRAD", 0, 0, 0)]
        assert read_axes(mock_reader(axes)) == axes


class TestCheckAxesMatch:
    """Tests for check_axes_match."""

    def test_same_axes(self):
        """Test identical axes match with nothing differing."""
        axes = [Axis("wght", 100, 400, 900), Axis("opsz", 8, 14, 144)]
        assert check_axes_match(axes, list(axes)) == []

    def test_order_does_not_matter(self):
        """Test the same tags in a different order still match."""
        left = [Axis("wght", 100, 400, 900), Axis("opsz", 8, 14, 144)]
        right = [Axis("opsz", 8, 14, 144), Axis("wght", 100, 400, 900)]
        assert check_axes_match(left, right) == []

    def test_differing_ranges_reported(self):
        """Test same tags with different bounds are returned, not raised."""
        left = [Axis("wght", 100, 400, 900), Axis("opsz", 8, 14, 144)]
        right = [Axis("wght", 100, 400, 700), Axis("opsz", 8, 14, 144)]
        assert check_axes_match(left, right) == ["wght"]

    def test_mismatched_tags(self):
        """Test differing tag sets raise with both sides listed."""
        left = [Axis("wght", 100, 400, 900), Axis("FILL", 0, 0, 1)]
        right = [Axis("wght", 100, 400, 900), Axis("GRAD", -25, 0, 200)]

        with pytest.raises(AxisMismatchError) as exc_info:
            check_axes_match(left, right)

        assert exc_info.value.left_only == ["FILL"]
        assert exc_info.value.right_only == ["GRAD"]
        assert "only in left: FILL" in str(exc_info.value)
