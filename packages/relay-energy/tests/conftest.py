from __future__ import annotations

import pytest

from relay import Facing, World
from relay_energy import FilledEffect, Receiver, RefillActuator, RefillTriggered, SourceDevice

SOURCE_POS = (2, 2, 2)
NEIGHBOR_POS = (3, 2, 2)
ACTUATOR_POS = (2, 3, 2)


class Recorder:
    """Collects emitted effects and block-update requests from a world."""

    def __init__(self, world: World) -> None:
        self.effects: list = []
        self.updates: list = []
        world.on_emit(self.effects.append)
        world.on_update(lambda w, c, b: self.updates.append(c))

    def filled(self) -> list[FilledEffect]:
        return [e for e in self.effects if isinstance(e, FilledEffect)]

    def refills(self) -> list[RefillTriggered]:
        return [e for e in self.effects if isinstance(e, RefillTriggered)]


@pytest.fixture
def world() -> World:
    return World(8, 8, 8)


@pytest.fixture
def recorder(world: World) -> Recorder:
    return Recorder(world)


@pytest.fixture
def receiver(world: World) -> Receiver:
    return world.place(NEIGHBOR_POS, Receiver())


@pytest.fixture
def source(world: World) -> SourceDevice:
    return world.place(SOURCE_POS, SourceDevice(Facing.EAST))


@pytest.fixture
def actuator(world: World) -> RefillActuator:
    return world.place(ACTUATOR_POS, RefillActuator(stroke=4, refill_amount=16))
