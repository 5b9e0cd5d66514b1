"""Constellation generation.

A constellation is the ordered, finite list of coordinates a run compares
glyphs at. Its order depends only on axis declaration order, and the
position of a coordinate in it is the index used in artifact filenames.
"""

import itertools
from collections.abc import Iterator

from varsweep.config import ConstellationConfig, ConstellationStrategy
from varsweep.core.axes import check_axes_match
from varsweep.domain import Axis, Coordinate


def extremes_constellation(axes: list[Axis]) -> Iterator[Coordinate]:
    """Yield the default, per-axis extremes and both corners.

    For ``n`` axes this yields exactly ``2n + 3`` coordinates:

    1. all axes at default
    2. for each axis in declaration order: that axis at min, then at max,
       all others at default
    3. all axes at min, then all axes at max

    Coincident coordinates (e.g. an axis whose default is its min) are
    kept so that indices stay stable.
    """
    default = Coordinate.default_for(axes)
    yield default

    for axis in axes:
        yield default.replace({axis.tag: axis.min})
        yield default.replace({axis.tag: axis.max})

    yield Coordinate(values=tuple((axis.tag, axis.min) for axis in axes))
    yield Coordinate(values=tuple((axis.tag, axis.max) for axis in axes))


def axis_stops(axis: Axis, step: float) -> list[float]:
    """Stops from min to max by ``step``, plus default and max, sorted and unique."""
    stops = []
    if step > 0:
        current = axis.min
        while current <= axis.max:
            stops.append(current)
            current += step
    stops.append(axis.default)
    stops.append(axis.max)
    stops.append(axis.min)
    return sorted(set(stops))


def grid_constellation(axes: list[Axis], config: ConstellationConfig) -> Iterator[Coordinate]:
    """Yield the cartesian product of every axis's stops.

    The first declared axis varies slowest. Axes without a configured step
    are split into ``grid_divisions`` equal steps.
    """
    stop_lists = []
    for axis in axes:
        step = config.grid_steps.get(axis.tag)
        if step is None:
            step = (axis.max - axis.min) / config.grid_divisions
        stop_lists.append([(axis.tag, value) for value in axis_stops(axis, step)])

    for combination in itertools.product(*stop_lists):
        yield Coordinate(values=tuple(combination))


def generate_constellation(
    left: list[Axis],
    right: list[Axis],
    config: ConstellationConfig | None = None,
) -> list[Coordinate]:
    """Build the ordered constellation for a pair of fonts.

    Coordinates follow the left font's axis declaration order and bounds.

    Args:
        left: Axes of the left font
        right: Axes of the right font
        config: Sampling configuration (default: extremes)

    Returns:
        Ordered list of coordinates

    Raises:
        AxisMismatchError: If the fonts declare different axis tags
    """
    check_axes_match(left, right)
    config = config or ConstellationConfig()

    if config.strategy == ConstellationStrategy.GRID:
        return list(grid_constellation(left, config))
    return list(extremes_constellation(left))
