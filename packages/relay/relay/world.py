"""World - bounded 3D block grid with spatial lookup and persistence."""

from __future__ import annotations

from typing import Any, Callable, Generator, TypeVar

from relay.block import Block
from relay.facing import Facing
from relay.types import Coord, OccupiedCellError, Record, SnapshotError

T = TypeVar("T")

# Hook callback signatures.
BlockHook = Callable[["World", Coord, Block], None]
EmitHook = Callable[[Any], None]

BlockFactory = Callable[..., Block]


class World:
    def __init__(self, width: int = 16, height: int = 16, depth: int = 16) -> None:
        if width <= 0 or height <= 0 or depth <= 0:
            raise ValueError("world dimensions must be positive")
        self._width = width
        self._height = height
        self._depth = depth
        self._blocks: dict[Coord, Block] = {}
        self._registry: dict[str, BlockFactory] = {}
        self._on_place: list[BlockHook] = []
        self._on_remove: list[BlockHook] = []
        self._on_update: list[BlockHook] = []
        self._on_emit: list[EmitHook] = []
        self._hooks_enabled: bool = True

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def depth(self) -> int:
        return self._depth

    def in_bounds(self, coord: Coord) -> bool:
        x, y, z = coord
        return 0 <= x < self._width and 0 <= y < self._height and 0 <= z < self._depth

    def _check_bounds(self, coord: Coord) -> None:
        if not self.in_bounds(coord):
            raise ValueError(
                f"{coord} out of bounds for "
                f"{self._width}x{self._height}x{self._depth} world"
            )

    # -- Placement --

    def place(self, coord: Coord, block: Block) -> Block:
        self._check_bounds(coord)
        if coord in self._blocks:
            raise OccupiedCellError(
                coord, f"Cell {coord} already holds {self._blocks[coord]!r}"
            )
        if block.placed:
            raise ValueError(f"{block!r} is already placed in a world")
        self._register(type(block).kind, type(block))
        block.world = self
        block.pos = coord
        self._blocks[coord] = block
        if self._hooks_enabled:
            for cb in list(self._on_place):
                cb(self, coord, block)
        return block

    def remove(self, coord: Coord) -> Block | None:
        block = self._blocks.pop(coord, None)
        if block is None:
            return None
        if self._hooks_enabled:
            for cb in list(self._on_remove):
                cb(self, coord, block)
        block.world = None
        block.pos = None
        return block

    def at(self, coord: Coord) -> Block | None:
        return self._blocks.get(coord)

    def position_of(self, block: Block) -> Coord | None:
        if block.world is not self:
            return None
        return block.pos

    def __contains__(self, coord: object) -> bool:
        return coord in self._blocks

    def __len__(self) -> int:
        return len(self._blocks)

    # -- Spatial lookup --

    def find(self, coord: Coord, facing: Facing, capability: type[T]) -> T | None:
        """Return the block adjacent to *coord* in *facing* if it has *capability*.

        Empty cells, cells outside the world and blocks lacking the
        capability all resolve to ``None``.
        """
        block = self._blocks.get(facing.step(coord))
        if block is None or not isinstance(block, capability):
            return None
        return block

    def query(self, capability: type[T]) -> Generator[tuple[Coord, T], None, None]:
        for coord, block in list(self._blocks.items()):
            if self._blocks.get(coord) is not block:
                continue
            if isinstance(block, capability):
                yield coord, block

    def blocks(self) -> dict[Coord, Block]:
        return dict(self._blocks)

    # -- Notifications --

    def notify_block_update(self, coord: Coord) -> None:
        block = self._blocks.get(coord)
        if block is None or not self._hooks_enabled:
            return
        for cb in list(self._on_update):
            cb(self, coord, block)

    def emit(self, event: Any) -> None:
        if not self._hooks_enabled:
            return
        for cb in list(self._on_emit):
            cb(event)

    def on_place(self, callback: BlockHook) -> None:
        self._on_place.append(callback)

    def on_remove(self, callback: BlockHook) -> None:
        self._on_remove.append(callback)

    def on_update(self, callback: BlockHook) -> None:
        self._on_update.append(callback)

    def on_emit(self, callback: EmitHook) -> None:
        self._on_emit.append(callback)

    def off_place(self, callback: BlockHook) -> None:
        _discard(self._on_place, callback)

    def off_remove(self, callback: BlockHook) -> None:
        _discard(self._on_remove, callback)

    def off_update(self, callback: BlockHook) -> None:
        _discard(self._on_update, callback)

    def off_emit(self, callback: EmitHook) -> None:
        _discard(self._on_emit, callback)

    # -- Dirty tracking --

    def dirty(self) -> frozenset[Coord]:
        return frozenset(c for c, b in self._blocks.items() if b.dirty)

    def collect_dirty(self) -> dict[Coord, Record]:
        """Return the records of every dirty block and clear their flags."""
        records: dict[Coord, Record] = {}
        for coord, block in self._blocks.items():
            if block.dirty:
                records[coord] = block.serialize()
                block.dirty = False
        return records

    # -- Snapshot / restore --

    def _register(self, kind: str, factory: BlockFactory) -> None:
        self._registry.setdefault(kind, factory)

    def register_block(self, factory: BlockFactory, kind: str | None = None) -> None:
        """Explicit registration for restoring into a fresh world.

        *factory* is called as ``factory(facing=..., **settings)``, where
        *settings* is what the block's :meth:`Block.settings` returned when
        the snapshot was taken. *kind* defaults to the factory's ``kind``
        attribute.
        """
        if kind is None:
            kind = getattr(factory, "kind", None)
            if kind is None:
                raise ValueError(f"Cannot infer block kind for {factory!r}")
        self._registry[kind] = factory

    def snapshot(self) -> dict[str, Any]:
        blocks: list[dict[str, Any]] = []
        for coord in sorted(self._blocks):
            block = self._blocks[coord]
            blocks.append({
                "pos": list(coord),
                "kind": type(block).kind,
                "facing": block.facing.name if block.facing is not None else None,
                "settings": block.settings(),
                "state": block.serialize(),
            })
        return {
            "size": [self._width, self._height, self._depth],
            "blocks": blocks,
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Replace the world's contents with a snapshot.

        Every block is built and given its record before any existing block
        is removed. A snapshot that fails to build raises SnapshotError and
        leaves the world as it was.
        """
        size = data.get("size")
        if size != [self._width, self._height, self._depth]:
            raise SnapshotError(
                f"Size mismatch: snapshot has {size}, world is "
                f"{[self._width, self._height, self._depth]}"
            )

        built: list[tuple[Coord, Block]] = []
        seen: set[Coord] = set()
        for entry in data["blocks"]:
            coord = _as_coord(entry["pos"])
            if not self.in_bounds(coord) or coord in seen:
                raise SnapshotError(f"Invalid or duplicate position {entry['pos']!r}")
            seen.add(coord)
            block = self._build(entry)
            block.restore(entry.get("state", {}))
            built.append((coord, block))

        self._hooks_enabled = False
        try:
            for coord in list(self._blocks):
                self.remove(coord)
            for coord, block in built:
                self.place(coord, block)
            for _, block in built:
                block.on_load()
        finally:
            self._hooks_enabled = True
        for _, block in built:
            block.dirty = False

    def _build(self, entry: dict[str, Any]) -> Block:
        kind = entry["kind"]
        factory = self._registry.get(kind)
        if factory is None:
            raise SnapshotError(f"Unregistered block kind: {kind!r}")
        facing_name = entry.get("facing")
        settings = entry.get("settings", {})
        try:
            facing = Facing.from_name(facing_name) if facing_name else None
            return factory(facing=facing, **settings)
        except (TypeError, ValueError) as exc:
            raise SnapshotError(f"Cannot rebuild {kind!r} block: {exc}") from exc


def _as_coord(raw: Any) -> Coord:
    x, y, z = raw
    return (int(x), int(y), int(z))


def _discard(callbacks: list[Any], callback: Any) -> None:
    try:
        callbacks.remove(callback)
    except ValueError:
        pass
