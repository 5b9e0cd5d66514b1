"""Core geometric types for outline representation.

This module defines the geometry extracted from a glyph at one coordinate:
- Point: A 2D point with curve type information
- Contour: A closed, ordered sequence of points
- Outline: The ordered contours of one glyph instance
- WindingDirection: Enum for contour winding direction
- PointType: Enum for point type on a curve

Outlines are produced fresh per extraction and never mutated afterwards,
so every type here is a frozen dataclass built on tuples.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class WindingDirection(Enum):
    """Contour winding direction.

    Determined from the sign of the shoelace area in a y-up coordinate
    system: positive is counter-clockwise.
    """

    CLOCKWISE = "cw"
    COUNTER_CLOCKWISE = "ccw"


class PointType(Enum):
    """Point type on a contour.

    Points can be:
    - ON_CURVE: Point on the actual curve
    - OFF_CURVE_QUAD: Quadratic Bezier control point (TrueType)
    - OFF_CURVE_CUBIC: Cubic Bezier control point (PostScript/CFF)
    """

    ON_CURVE = "on"
    OFF_CURVE_QUAD = "qcurve"
    OFF_CURVE_CUBIC = "curve"

    @property
    def is_on_curve(self) -> bool:
        return self is PointType.ON_CURVE


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space with curve metadata.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in font units
        y: Y coordinate in font units
        point_type: Type of point (on-curve or control point)
    """

    x: float
    y: float
    point_type: PointType = PointType.ON_CURVE

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x, y, and type fields
        """
        return {
            "x": self.x,
            "y": self.y,
            "type": self.point_type.value
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x, y, and type fields

        Returns:
            Point instance
        """
        return cls(
            x=data["x"],
            y=data["y"],
            point_type=PointType(data["type"])
        )


@dataclass(frozen=True, slots=True)
class Contour:
    """A closed contour representing a shape boundary.

    The last point implicitly connects back to the first.

    Attributes:
        points: Ordered points forming the contour
    """

    points: tuple[Point, ...]

    def __len__(self) -> int:
        return len(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        Control points are included, which is enough to decide the
        winding direction of a closed outline.

        Returns:
            Signed area of the contour (positive for counter-clockwise)
        """
        n = len(self.points)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        return area / 2.0

    @property
    def direction(self) -> WindingDirection:
        """Winding direction derived from the signed area."""
        if self.signed_area() < 0:
            return WindingDirection.CLOCKWISE
        return WindingDirection.COUNTER_CLOCKWISE

    def bounding_box(self) -> tuple[float, float, float, float] | None:
        """Calculate control-point bounding box of the contour.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y), or None if empty
        """
        if not self.points:
            return None

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def reversed(self) -> "Contour":
        """Return the same closed curve traversed in the opposite direction.

        The start point is kept in place so only the traversal changes.
        """
        if not self.points:
            return self
        head, *tail = self.points
        return Contour(points=(head, *reversed(tail)))

    def rotated(self, start: int) -> "Contour":
        """Return the same closed curve starting at ``points[start]``."""
        if not self.points:
            return self
        start %= len(self.points)
        return Contour(points=self.points[start:] + self.points[:start])

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the contour
        """
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contour":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a contour

        Returns:
            Contour instance
        """
        return cls(points=tuple(Point.from_dict(p) for p in data["points"]))


@dataclass(frozen=True, slots=True)
class Outline:
    """The contour geometry of one glyph at one coordinate.

    Attributes:
        glyph_name: Name of the glyph the outline was drawn from
        contours: Ordered contours of the glyph
    """

    glyph_name: str
    contours: tuple[Contour, ...] = ()

    def is_empty(self) -> bool:
        """Check if the outline has no contours (e.g. space)."""
        return len(self.contours) == 0

    @property
    def point_count(self) -> int:
        return sum(len(c) for c in self.contours)

    def bounding_box(self) -> tuple[float, float, float, float] | None:
        """Union of all contour bounding boxes, or None if empty."""
        boxes = [b for b in (c.bounding_box() for c in self.contours) if b is not None]
        if not boxes:
            return None
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "glyph_name": self.glyph_name,
            "contours": [c.to_dict() for c in self.contours],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Outline":
        """Deserialize from dictionary."""
        return cls(
            glyph_name=data["glyph_name"],
            contours=tuple(Contour.from_dict(c) for c in data["contours"]),
        )
