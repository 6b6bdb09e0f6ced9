"""Facing - the six axis directions a block can point in."""

from __future__ import annotations

from enum import Enum

from relay.types import Coord


class Facing(Enum):
    DOWN = (0, -1, 0)
    UP = (0, 1, 0)
    NORTH = (0, 0, -1)
    SOUTH = (0, 0, 1)
    WEST = (-1, 0, 0)
    EAST = (1, 0, 0)

    @property
    def offset(self) -> Coord:
        return self.value

    @property
    def opposite(self) -> Facing:
        dx, dy, dz = self.value
        return Facing((-dx, -dy, -dz))

    def step(self, coord: Coord) -> Coord:
        """Return the coordinate adjacent to *coord* in this direction."""
        dx, dy, dz = self.value
        x, y, z = coord
        return (x + dx, y + dy, z + dz)

    @classmethod
    def from_name(cls, name: str) -> Facing:
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown facing {name!r}") from None
