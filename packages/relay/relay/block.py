"""Block - base class for stateful objects that occupy a world cell."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from relay.facing import Facing
from relay.types import Coord, Record

if TYPE_CHECKING:
    from relay.world import World


class Block:
    """A cell occupant bound to a world on placement.

    ``world`` and ``pos`` are set by :meth:`World.place` and cleared by
    :meth:`World.remove`. Subclasses override :meth:`serialize`,
    :meth:`restore` and :meth:`on_load` to take part in persistence.
    """

    kind: ClassVar[str] = "block"

    def __init__(self, facing: Facing | None = None) -> None:
        self.facing = facing
        self.world: World | None = None
        self.pos: Coord | None = None
        self.dirty = False

    @property
    def placed(self) -> bool:
        return self.world is not None and self.pos is not None

    def mark_dirty(self) -> None:
        self.dirty = True

    def notify_block_update(self) -> None:
        """Mark dirty and ask the world to resync observers of this cell."""
        self.mark_dirty()
        if self.world is not None and self.pos is not None:
            self.world.notify_block_update(self.pos)

    def emit(self, event: Any) -> None:
        if self.world is not None:
            self.world.emit(event)

    def settings(self) -> Record:
        """Construction keyword arguments, stored beside the record in snapshots."""
        return {}

    def serialize(self) -> Record:
        return {}

    def restore(self, record: Record) -> None:
        pass

    def on_load(self) -> None:
        """Re-derive transient state once every restored block is placed."""

    def produce_sync_payload(self) -> Record:
        return self.serialize()

    def apply_sync_payload(self, payload: Record) -> None:
        self.restore(payload)
        self.on_load()
        self.notify_block_update()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pos={self.pos}, facing={self.facing})"
