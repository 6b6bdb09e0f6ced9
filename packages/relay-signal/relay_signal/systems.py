"""System factories and world wiring for effect dispatch."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from relay_signal.bus import EffectBus
from relay_signal.events import BlockUpdate

if TYPE_CHECKING:
    from relay import Block, Coord, TickContext, World

logger = logging.getLogger(__name__)


def make_signal_system(bus: EffectBus) -> Callable[[World, TickContext], None]:
    def signal_system(world: World, ctx: TickContext) -> None:
        bus.flush()

    return signal_system


def connect_world(world: World, bus: EffectBus) -> None:
    """Route the world's effects and block-update notifications onto *bus*."""

    def on_update(w: World, coord: Coord, block: Block) -> None:
        bus.publish(BlockUpdate(coord, block.produce_sync_payload()))

    world.on_emit(bus.publish)
    world.on_update(on_update)


def make_replica_handler(replica: World) -> Callable[[BlockUpdate], None]:
    """Return a ``BlockUpdate`` handler that applies payloads to *replica*.

    Updates for cells the replica has no block in are skipped.
    """

    def apply_update(event: BlockUpdate) -> None:
        block = replica.at(event.position)
        if block is None:
            logger.debug("replica has no block at %s, dropping update", event.position)
            return
        block.apply_sync_payload(event.payload)

    return apply_update
