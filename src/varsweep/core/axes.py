"""Axis model validation.

Reads and validates the variation axes of a loaded font, and checks that
two fonts describe the same variation space.
"""

from varsweep.domain import Axis
from varsweep.exceptions import AxisMismatchError, AxisParseError
from varsweep.io import FontReader


def read_axes(reader: FontReader) -> list[Axis]:
    """Report a font's axes in declaration order.

    Args:
        reader: Loaded font reader

    Returns:
        Axes in fvar declaration order

    Raises:
        AxisParseError: If the font has no variation axes, declares a tag
            twice, or an axis violates ``min <= default <= max``
    """
    axes = reader.axes()
    if not axes:
        raise AxisParseError(str(reader.path), "font has no variation axes")

    seen: set[str] = set()
    for axis in axes:
        if axis.tag in seen:
            raise AxisParseError(str(reader.path), f"axis '{axis.tag}' declared twice")
        seen.add(axis.tag)

        if axis.min > axis.max:
            raise AxisParseError(
                str(reader.path),
                f"axis '{axis.tag}' has inverted bounds (min {axis.min:g} > max {axis.max:g})",
            )
        if not axis.is_valid():
            raise AxisParseError(
                str(reader.path),
                f"axis '{axis.tag}' default {axis.default:g} outside "
                f"[{axis.min:g}, {axis.max:g}]",
            )

    return axes


def check_axes_match(left: list[Axis], right: list[Axis]) -> list[str]:
    """Verify both fonts declare the same axis tags.

    Declaration order may differ between the fonts.

    Args:
        left: Axes of the left font
        right: Axes of the right font

    Returns:
        Tags (in left declaration order) whose min/default/max differ

    Raises:
        AxisMismatchError: If the tag sets differ
    """
    left_tags = [a.tag for a in left]
    right_tags = [a.tag for a in right]

    if set(left_tags) != set(right_tags):
        raise AxisMismatchError(
            left_only=[t for t in left_tags if t not in right_tags],
            right_only=[t for t in right_tags if t not in left_tags],
        )

    right_by_tag = {a.tag: a for a in right}
    return [a.tag for a in left if not a.same_range(right_by_tag[a.tag])]
