"""Clock and TickContext for the fixed-timestep world."""

from typing import Callable

from relay.types import TickContext


class Clock:
    def __init__(self, tps: int) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._dt = 1.0 / tps
        self._world_time = 0

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def world_time(self) -> int:
        """Total ticks since the world was created."""
        return self._world_time

    def advance(self) -> int:
        self._world_time += 1
        return self._world_time

    def context(self, stop_fn: Callable[[], None]) -> TickContext:
        return TickContext(
            world_time=self._world_time,
            dt=self._dt,
            elapsed=self._world_time * self._dt,
            request_stop=stop_fn,
        )

    def reset(self, world_time: int = 0) -> None:
        self._world_time = world_time
