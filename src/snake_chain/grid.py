"""Grid coordinates and cardinal directions."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Direction(enum.Enum):
    """Cardinal facings with (dx, dy) values. Positive y points up."""

    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        """Return the direction pointing the other way."""
        return _OPPOSITES[self]

    @classmethod
    def from_name(cls, name: str) -> Direction:
        """Look up a direction by case-insensitive name (``"up"`` etc.)."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}.") from None


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class GridCoordinate:
    """Immutable integer cell position on an unbounded grid."""

    x: int
    y: int

    def __add__(self, other: GridCoordinate) -> GridCoordinate:
        return GridCoordinate(self.x + other.x, self.y + other.y)

    def __sub__(self, other: GridCoordinate) -> GridCoordinate:
        return GridCoordinate(self.x - other.x, self.y - other.y)

    def in_front(self, direction: Direction) -> GridCoordinate:
        """Return the neighbouring cell one step along *direction*."""
        dx, dy = direction.value
        return GridCoordinate(self.x + dx, self.y + dy)

    def behind(self, direction: Direction) -> GridCoordinate:
        """Return the neighbouring cell one step against *direction*."""
        dx, dy = direction.value
        return GridCoordinate(self.x - dx, self.y - dy)

    def to_list(self) -> list[int]:
        return [self.x, self.y]
