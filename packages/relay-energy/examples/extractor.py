"""Extractor -- a source relaying charge into a receiver, with refills.

Demonstrates:
- Placing a source, its neighbor and a refill actuator in a world
- Wiring the effect bus and neighbor-change notifications
- Watching the relay drain, stop, refill and resume
- Saving mid-stroke and restoring into a fresh engine

Run: python -m examples.extractor
"""

import json
import logging

from relay import Engine, Facing, World
from relay_signal import EffectBus, connect_world, make_signal_system
from relay_energy import (
    FilledEffect,
    Receiver,
    RefillActuator,
    RefillTriggered,
    SourceDevice,
    connect_relays,
    make_actuator_system,
    make_relay_system,
)


def build() -> tuple[Engine, EffectBus]:
    engine = Engine(tps=20, world=World(8, 8, 8))
    bus = EffectBus()
    connect_world(engine.world, bus)
    connect_relays(engine.world)
    engine.add_system(make_actuator_system())
    engine.add_system(make_relay_system())
    engine.add_system(make_signal_system(bus))
    return engine, bus


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    print("=== Extractor ===\n")

    engine, bus = build()
    bus.subscribe(FilledEffect, lambda e: print(f"  * filled at {e.position}"))
    bus.subscribe(RefillTriggered, lambda e: print(f"  * refill at {e.position}"))

    world = engine.world
    receiver = world.place((3, 2, 2), Receiver(capacity=64))
    source = world.place((2, 2, 2), SourceDevice(Facing.EAST))
    world.place((2, 3, 2), RefillActuator(stroke=20, refill_amount=32))
    source.fill(32)

    for _ in range(12):
        engine.run(5)
        print(
            f"t={engine.clock.world_time:3d}  source={source.charge:3d} "
            f"[{source.state}]  receiver={receiver.charge:3d}"
        )

    snap = json.loads(json.dumps(engine.snapshot()))
    restored, _ = build()
    for block_type in (SourceDevice, Receiver, RefillActuator):
        restored.world.register_block(block_type)
    restored.restore(snap)
    copy = restored.world.at((2, 2, 2))
    print(f"\nRestored at t={restored.clock.world_time}: source={copy.charge} [{copy.state}]")


if __name__ == "__main__":
    main()
