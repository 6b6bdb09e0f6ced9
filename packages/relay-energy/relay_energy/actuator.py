"""RefillActuator - mechanical trigger that tops up the device below it."""
from __future__ import annotations

import logging

from relay import Block, Facing, Record, SnapshotError
from relay_energy.effects import RefillTriggered
from relay_energy.transfer import EnergyTransfer

logger = logging.getLogger(__name__)


class RefillActuator(Block):
    """Engages for ``stroke`` ticks, then delivers charge downward.

    On completion it fills the EnergyTransfer block directly below with up
    to ``refill_amount``, never more than that block's free room.
    """

    kind = "refill_actuator"

    def __init__(
        self,
        stroke: int = 20,
        refill_amount: int = 16,
        facing: Facing | None = None,
    ) -> None:
        super().__init__(facing)
        if stroke <= 0:
            raise ValueError(f"stroke must be > 0, got {stroke}")
        if refill_amount < 0:
            raise ValueError(f"refill_amount must be >= 0, got {refill_amount}")
        self.stroke = stroke
        self.refill_amount = refill_amount
        self._active = False
        self._remaining = 0

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def remaining(self) -> int:
        return self._remaining

    def activate(self) -> bool:
        """Start a stroke. Returns False when already engaged."""
        if self._active:
            return False
        self._active = True
        self._remaining = self.stroke
        logger.debug("refill actuator at %s engaged for %d ticks", self.pos, self.stroke)
        if self.pos is not None:
            self.emit(RefillTriggered(self.pos))
        self.notify_block_update()
        return True

    def advance(self) -> None:
        if not self._active:
            return
        self._remaining -= 1
        self.mark_dirty()
        if self._remaining <= 0:
            self._complete()

    def _complete(self) -> None:
        self._active = False
        self._remaining = 0
        target = self.target()
        if target is not None:
            amount = min(self.refill_amount, target.capacity - target.charge)
            if amount > 0:
                target.fill(amount)
            logger.debug("refill actuator at %s delivered %d", self.pos, amount)
        self.notify_block_update()

    def target(self) -> EnergyTransfer | None:
        if self.world is None or self.pos is None:
            return None
        return self.world.find(self.pos, Facing.DOWN, EnergyTransfer)

    # -- Persistence --

    def settings(self) -> Record:
        return {"stroke": self.stroke, "refill_amount": self.refill_amount}

    def serialize(self) -> Record:
        return {"active": self._active, "remaining": self._remaining}

    def restore(self, record: Record) -> None:
        active = record.get("active", False)
        remaining = record.get("remaining", 0)
        if not isinstance(active, bool) or isinstance(remaining, bool) or not isinstance(remaining, int):
            raise SnapshotError(f"malformed actuator record {record!r}")
        self._active = active
        self._remaining = max(1, remaining) if active else 0
