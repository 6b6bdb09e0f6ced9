"""Shared type aliases, errors and the tick context for the block world."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

Coord = tuple[int, int, int]

# Flat key-value record produced by Block.serialize().
Record = dict[str, Any]


@dataclass(frozen=True, slots=True)
class TickContext:
    world_time: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]


class OccupiedCellError(ValueError):
    """Raised when placing a block into a cell that already holds one."""

    def __init__(self, coord: Coord, message: str) -> None:
        self.coord = coord
        super().__init__(message)


class SnapshotError(Exception):
    """Raised on restore failures (version mismatch, unregistered block kind, bad record)."""


if TYPE_CHECKING:
    from relay.world import World

System = Callable[["World", TickContext], None]
