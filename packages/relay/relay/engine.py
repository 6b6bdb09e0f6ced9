"""Engine - fixed-tick loop over a block world with dirty-block commits."""

import logging
from typing import Any, Callable

from relay.clock import Clock
from relay.types import Coord, Record, SnapshotError, System
from relay.world import World

logger = logging.getLogger(__name__)

_SNAPSHOT_VERSION = 1

# Receives the tick number and the records of blocks changed during it.
CommitHook = Callable[[int, dict[Coord, Record]], None]


class Engine:
    """Runs systems once per tick against a single world.

    With *on_commit* set, every tick ends by collecting the dirty blocks'
    records and handing them to the callback, so a store can persist only
    what changed. Without it, dirty flags accumulate until the caller
    collects them through :meth:`World.collect_dirty`.
    """

    def __init__(
        self,
        tps: int = 20,
        world: World | None = None,
        on_commit: CommitHook | None = None,
    ) -> None:
        self._clock = Clock(tps)
        self._world = world if world is not None else World()
        self._systems: list[System] = []
        self._on_commit = on_commit
        self._stop_requested = False

    @property
    def world(self) -> World:
        return self._world

    @property
    def clock(self) -> Clock:
        return self._clock

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def step(self) -> None:
        """Advance one tick: run systems in order, then commit dirty blocks."""
        self._stop_requested = False
        world_time = self._clock.advance()
        ctx = self._clock.context(self._request_stop)
        for system in self._systems:
            system(self._world, ctx)
            if self._stop_requested:
                break
        if self._on_commit is not None:
            records = self._world.collect_dirty()
            if records:
                self._on_commit(world_time, records)

    def run(self, n: int) -> int:
        """Run up to *n* ticks and return how many ran.

        A system calling ``ctx.request_stop()`` ends the run after the
        current tick.
        """
        ran = 0
        for _ in range(n):
            self.step()
            ran += 1
            if self._stop_requested:
                break
        return ran

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": _SNAPSHOT_VERSION,
            "world_time": self._clock.world_time,
            "tps": self._clock.tps,
            "world": self._world.snapshot(),
        }

    def restore(self, data: dict[str, Any]) -> None:
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )
        if data.get("tps") != self._clock.tps:
            raise SnapshotError(
                f"TPS mismatch: snapshot has {data.get('tps')}, engine has {self._clock.tps}"
            )
        self._world.restore(data["world"])
        self._clock.reset(data["world_time"])
        logger.debug("restored %d blocks at world_time %d", len(self._world), data["world_time"])
