"""Variation axis and coordinate types.

This module defines the types describing a variable font's design space:
- Axis: A single variation axis with its bounds
- Coordinate: A point in the design space, one value per axis
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Axis:
    """A variation axis as declared in the font's fvar table.

    Attributes:
        tag: Four-character axis tag (e.g., "wght", "opsz", "FILL")
        min: Minimum user-space value
        default: Default user-space value
        max: Maximum user-space value
    """

    tag: str
    min: float
    default: float
    max: float

    def is_valid(self) -> bool:
        """Check the ``min <= default <= max`` invariant."""
        return self.min <= self.default <= self.max

    def same_range(self, other: "Axis") -> bool:
        """Check whether another axis spans the same min/default/max."""
        return (self.min, self.default, self.max) == (other.min, other.default, other.max)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with tag, min, default, and max fields
        """
        return {
            "tag": self.tag,
            "min": self.min,
            "default": self.default,
            "max": self.max,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Axis":
        """Deserialize from dictionary."""
        return cls(
            tag=data["tag"],
            min=data["min"],
            default=data["default"],
            max=data["max"],
        )


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A location in variation space.

    Values are kept as an ordered tuple of (tag, value) pairs so that the
    coordinate is hashable and preserves axis declaration order.

    Attributes:
        values: Ordered (axis tag, user-space value) pairs
    """

    values: tuple[tuple[str, float], ...]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, float]) -> "Coordinate":
        """Build a coordinate from a tag -> value mapping, keeping its order."""
        return cls(values=tuple((tag, float(value)) for tag, value in mapping.items()))

    @classmethod
    def default_for(cls, axes: list[Axis]) -> "Coordinate":
        """Build the all-default coordinate for the given axes."""
        return cls(values=tuple((axis.tag, axis.default) for axis in axes))

    def as_dict(self) -> dict[str, float]:
        """Return the coordinate as a ``{tag: value}`` location."""
        return dict(self.values)

    def replace(self, updates: Mapping[str, float]) -> "Coordinate":
        """Return a copy with some axis values replaced."""
        return Coordinate(
            values=tuple((tag, float(updates.get(tag, value))) for tag, value in self.values)
        )

    def label(self) -> str:
        """Human-readable form, e.g. ``wght=400,opsz=14``."""
        return ",".join(f"{tag}={value:g}" for tag, value in self.values)

    def __iter__(self) -> Iterator[tuple[str, float]]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"values": [[tag, value] for tag, value in self.values]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Coordinate":
        """Deserialize from dictionary."""
        return cls(values=tuple((tag, float(value)) for tag, value in data["values"]))
