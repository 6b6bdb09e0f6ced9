"""Tests for world and engine snapshot/restore."""

import json

import pytest

from relay import Block, Facing, SnapshotError
from relay.engine import Engine
from relay.world import World


class Dial(Block):
    kind = "dial"

    def __init__(self, facing=None) -> None:
        super().__init__(facing)
        self.value = 0
        self.loaded_neighbor = None

    def serialize(self):
        return {"value": self.value}

    def restore(self, record):
        self.value = record.get("value", 0)

    def on_load(self):
        facing = self.facing or Facing.EAST
        self.loaded_neighbor = self.world.find(self.pos, facing, Dial)
        self.mark_dirty()


class Gear(Block):
    kind = "gear"

    def __init__(self, facing=None, teeth=12) -> None:
        super().__init__(facing)
        self.teeth = teeth

    def settings(self):
        return {"teeth": self.teeth}


def _world_with_dials() -> World:
    world = World(4, 4, 4)
    a = world.place((0, 0, 0), Dial(Facing.EAST))
    b = world.place((1, 0, 0), Dial(Facing.WEST))
    a.value = 3
    b.value = 7
    return world


def test_world_snapshot_shape():
    snap = _world_with_dials().snapshot()
    assert snap["size"] == [4, 4, 4]
    assert snap["blocks"][0] == {
        "pos": [0, 0, 0], "kind": "dial", "facing": "EAST", "settings": {},
        "state": {"value": 3},
    }


def test_world_round_trip_rebuilds_blocks():
    snap = _world_with_dials().snapshot()

    world = World(4, 4, 4)
    world.register_block(Dial)
    world.restore(snap)

    a = world.at((0, 0, 0))
    b = world.at((1, 0, 0))
    assert a.value == 3 and b.value == 7
    assert a.facing is Facing.EAST
    assert a.pos == (0, 0, 0)


def test_on_load_runs_after_every_block_is_placed():
    """A block's on_load sees neighbors restored after it."""
    world = World(4, 4, 4)
    world.register_block(Dial)
    world.restore(_world_with_dials().snapshot())
    a = world.at((0, 0, 0))
    b = world.at((1, 0, 0))
    assert a.loaded_neighbor is b
    assert b.loaded_neighbor is a


def test_restore_clears_dirty_flags():
    world = World(4, 4, 4)
    world.register_block(Dial)
    world.restore(_world_with_dials().snapshot())
    assert world.dirty() == frozenset()


def test_restore_suppresses_hooks():
    world = World(4, 4, 4)
    world.register_block(Dial)
    events = []
    world.on_place(lambda w, c, b: events.append(c))
    world.restore(_world_with_dials().snapshot())
    assert events == []


def test_restore_replaces_existing_blocks():
    world = World(4, 4, 4)
    world.register_block(Dial)
    stale = world.place((3, 3, 3), Dial())
    world.restore(_world_with_dials().snapshot())
    assert world.at((3, 3, 3)) is None
    assert stale.world is None


def test_restore_unregistered_kind():
    world = World(4, 4, 4)
    with pytest.raises(SnapshotError, match="Unregistered"):
        world.restore(_world_with_dials().snapshot())


def test_round_trip_keeps_construction_settings():
    world = World(4, 4, 4)
    world.place((2, 2, 2), Gear(Facing.UP, teeth=40))
    snap = json.loads(json.dumps(world.snapshot()))
    assert snap["blocks"][0]["settings"] == {"teeth": 40}

    fresh = World(4, 4, 4)
    fresh.register_block(Gear)
    fresh.restore(snap)
    gear = fresh.at((2, 2, 2))
    assert gear.teeth == 40
    assert gear.facing is Facing.UP


def test_failed_restore_leaves_world_untouched():
    world = World(4, 4, 4)
    world.register_block(Dial)
    kept = world.place((3, 3, 3), Dial())
    snap = _world_with_dials().snapshot()
    snap["blocks"].append({"pos": [2, 2, 2], "kind": "gear", "facing": None, "state": {}})

    with pytest.raises(SnapshotError, match="Unregistered"):
        world.restore(snap)
    assert world.at((3, 3, 3)) is kept
    assert kept.world is world
    assert len(world) == 1


def test_restore_rejects_unusable_settings():
    world = World(4, 4, 4)
    world.register_block(Gear)
    kept = world.place((0, 0, 0), Gear())
    snap = {"size": [4, 4, 4], "blocks": [
        {"pos": [1, 1, 1], "kind": "gear", "facing": None, "settings": {"cogs": 3}, "state": {}},
    ]}
    with pytest.raises(SnapshotError, match="gear"):
        world.restore(snap)
    assert world.at((0, 0, 0)) is kept


def test_restore_rejects_duplicate_positions():
    world = World(4, 4, 4)
    world.register_block(Dial)
    snap = _world_with_dials().snapshot()
    snap["blocks"].append(dict(snap["blocks"][0]))
    with pytest.raises(SnapshotError, match="duplicate"):
        world.restore(snap)
    assert len(world) == 0


def test_restore_size_mismatch():
    world = World(8, 8, 8)
    world.register_block(Dial)
    with pytest.raises(SnapshotError, match="Size mismatch"):
        world.restore(_world_with_dials().snapshot())


def test_register_block_with_custom_factory():
    world = World(4, 4, 4)
    built = []

    def factory(facing=None):
        dial = Dial(facing)
        built.append(dial)
        return dial

    world.register_block(factory, kind="dial")
    world.restore(_world_with_dials().snapshot())
    assert len(built) == 2


def test_register_block_needs_kind():
    world = World(4, 4, 4)
    with pytest.raises(ValueError):
        world.register_block(lambda facing=None: Dial(facing))


def test_engine_snapshot_round_trip_through_json():
    engine = Engine(tps=20, world=_world_with_dials())
    engine.run(10)
    snap = json.loads(json.dumps(engine.snapshot()))

    engine2 = Engine(tps=20, world=World(4, 4, 4))
    engine2.world.register_block(Dial)
    engine2.restore(snap)

    assert engine2.clock.world_time == 10
    assert engine2.world.at((1, 0, 0)).value == 7


def test_engine_restore_version_mismatch():
    engine = Engine(tps=20)
    snap = engine.snapshot()
    snap["version"] = 99
    with pytest.raises(SnapshotError, match="version"):
        Engine(tps=20).restore(snap)


def test_engine_restore_tps_mismatch():
    snap = Engine(tps=20).snapshot()
    with pytest.raises(SnapshotError, match="TPS"):
        Engine(tps=30).restore(snap)
