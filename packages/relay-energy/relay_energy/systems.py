"""System factories and world wiring for relay and actuator processing."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from relay import Facing
from relay_energy.actuator import RefillActuator
from relay_energy.source import SourceDevice

if TYPE_CHECKING:
    from relay import Block, Coord, TickContext, World


def make_relay_system() -> Callable[[World, TickContext], None]:
    """Return a system that ticks every SourceDevice in the world.

    Each source applies its own ``world_time % interval`` gate.
    """

    def relay_system(world: World, ctx: TickContext) -> None:
        for _, source in world.query(SourceDevice):
            source.tick(ctx.world_time)

    return relay_system


def make_actuator_system() -> Callable[[World, TickContext], None]:
    """Return a system that advances engaged refill actuators by one tick."""

    def actuator_system(world: World, ctx: TickContext) -> None:
        for _, actuator in world.query(RefillActuator):
            actuator.advance()

    return actuator_system


def connect_relays(world: World) -> None:
    """Re-evaluate sources whose facing cell gains or loses a block.

    A newly placed source evaluates its own relay as well.
    """

    def on_neighbor_changed(w: World, coord: Coord, block: Block) -> None:
        for facing in Facing:
            source = w.at(facing.step(coord))
            if isinstance(source, SourceDevice) and source.facing is facing.opposite:
                source.update_transfer_state()

    def on_place(w: World, coord: Coord, block: Block) -> None:
        if isinstance(block, SourceDevice):
            block.update_transfer_state()
        on_neighbor_changed(w, coord, block)

    world.on_place(on_place)
    world.on_remove(on_neighbor_changed)
