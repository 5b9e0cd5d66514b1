"""Converters between fonttools pen protocols and domain models.

This module handles the conversion between fonttools drawing commands and
our domain models (Outline, Contour, Point), in both directions:
- recording_to_contours: pen recording -> domain contours
- draw_outline: domain outline -> any fonttools segment pen
"""

from typing import Any

from fontTools.pens.basePen import AbstractPen

from varsweep.domain.outline import Contour, Outline, Point, PointType


def recording_to_contours(recording: list[tuple[str, tuple[Any, ...]]]) -> tuple[Contour, ...]:
    """Convert a RecordingPen recording to Contour objects.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), (x2, y2), ...))  # Quadratic
    - ('qCurveTo', ((x1, y1), ..., None))  # All off-curve contour
    - ('curveTo', ((x1, y1), (x2, y2), (x3, y3)))  # Cubic
    - ('closePath', ())

    Point order is preserved exactly as drawn.

    Args:
        recording: List of drawing commands from RecordingPen

    Returns:
        Tuple of Contour objects
    """
    contours: list[Contour] = []
    current_points: list[Point] = []

    for command, args in recording:
        if command == "moveTo":
            if current_points:
                contours.append(Contour(points=tuple(current_points)))
                current_points = []

            x, y = args[0]
            current_points.append(Point(x, y, PointType.ON_CURVE))

        elif command == "lineTo":
            x, y = args[0]
            current_points.append(Point(x, y, PointType.ON_CURVE))

        elif command == "qCurveTo":
            *off_curves, last = args
            for x, y in off_curves:
                current_points.append(Point(x, y, PointType.OFF_CURVE_QUAD))
            if last is not None:
                x, y = last
                current_points.append(Point(x, y, PointType.ON_CURVE))

        elif command == "curveTo":
            *off_curves, last = args
            for x, y in off_curves:
                current_points.append(Point(x, y, PointType.OFF_CURVE_CUBIC))
            x, y = last
            current_points.append(Point(x, y, PointType.ON_CURVE))

        elif command == "closePath" or command == "endPath":
            if current_points:
                contours.append(Contour(points=tuple(current_points)))
                current_points = []

    if current_points:
        contours.append(Contour(points=tuple(current_points)))

    return tuple(contours)


def draw_outline(outline: Outline, pen: AbstractPen) -> None:
    """Replay a domain outline into a fonttools segment pen.

    Each contour is started at its first on-curve point. Runs of off-curve
    points become one qCurveTo or curveTo segment ending at the next
    on-curve point; contours with no on-curve point at all are drawn as a
    single implied-on-curve qCurveTo.

    Args:
        outline: Outline to draw
        pen: Any fonttools segment pen (SVGPathPen, RecordingPen, ...)
    """
    for contour in outline.contours:
        if not contour.points:
            continue

        start = next(
            (i for i, p in enumerate(contour.points) if p.point_type.is_on_curve),
            None,
        )

        if start is None:
            pen.qCurveTo(*(p.to_tuple() for p in contour.points), None)
            pen.closePath()
            continue

        points = contour.rotated(start).points
        pen.moveTo(points[0].to_tuple())

        pending: list[Point] = []
        for point in points[1:]:
            if not point.point_type.is_on_curve:
                pending.append(point)
                continue
            _draw_segment(pen, pending, point)
            pending = []

        if pending:
            _draw_segment(pen, pending, points[0])

        pen.closePath()


def _draw_segment(pen: AbstractPen, off_curves: list[Point], on_curve: Point) -> None:
    """Emit one segment ending at ``on_curve``."""
    if not off_curves:
        pen.lineTo(on_curve.to_tuple())
    elif off_curves[0].point_type == PointType.OFF_CURVE_CUBIC:
        pen.curveTo(*(p.to_tuple() for p in off_curves), on_curve.to_tuple())
    else:
        pen.qCurveTo(*(p.to_tuple() for p in off_curves), on_curve.to_tuple())
