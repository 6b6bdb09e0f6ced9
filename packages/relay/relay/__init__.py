"""relay - A fixed-tick block world for point-to-point device simulations."""

from relay.block import Block
from relay.clock import Clock
from relay.engine import Engine
from relay.facing import Facing
from relay.types import Coord, OccupiedCellError, Record, SnapshotError, TickContext
from relay.world import World

__all__ = [
    "Block",
    "Engine",
    "World",
    "Clock",
    "Facing",
    "TickContext",
    "Coord",
    "Record",
    "OccupiedCellError",
    "SnapshotError",
]
