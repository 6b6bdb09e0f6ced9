"""EnergyTransfer capability and the shared charge-buffer implementation."""
from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from relay import Block, Facing, Record, SnapshotError

logger = logging.getLogger(__name__)


@runtime_checkable
class EnergyTransfer(Protocol):
    """Capability of any block that can hold and exchange charge.

    ``fill`` returns the overfill that did not fit, ``drain`` the amount
    actually removed. Neither raises on capacity bounds.
    """

    is_sending: bool
    is_receiving: bool

    @property
    def charge(self) -> int: ...

    @property
    def capacity(self) -> int: ...

    @property
    def send_limit(self) -> int: ...

    @property
    def efficiency(self) -> float: ...

    def receive_limit(self) -> int: ...

    def fill(self, amount: int) -> int: ...

    def drain(self, amount: int) -> int: ...

    def can_send(self) -> bool: ...

    def can_receive(self) -> bool: ...

    def set_sending(self, sending: bool) -> None: ...

    def set_receiving(self, receiving: bool) -> None: ...

    def update_transfer_state(self) -> None: ...


class ChargedBlock(Block):
    """Block with a bounded charge buffer, ``0 <= charge <= capacity``.

    Only ``charge`` is persisted. The advisory flags and the composite
    ``transfer_efficiency`` are transient and re-derived on load.
    """

    def __init__(
        self,
        capacity: int,
        efficiency: float = 1.0,
        facing: Facing | None = None,
    ) -> None:
        super().__init__(facing)
        if capacity <= 0:
            raise ValueError(f"capacity must be > 0, got {capacity}")
        if not 0.0 < efficiency <= 1.0:
            raise ValueError(f"efficiency must be in (0, 1], got {efficiency}")
        self._capacity = capacity
        self._efficiency = efficiency
        self._charge = 0
        self.transfer_efficiency = efficiency
        self.is_sending = False
        self.is_receiving = False

    @property
    def charge(self) -> int:
        return self._charge

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def efficiency(self) -> float:
        return self._efficiency

    @property
    def send_limit(self) -> int:
        return 0

    def receive_limit(self) -> int:
        return self._capacity - self._charge

    def can_send(self) -> bool:
        return self._charge > 0

    def can_receive(self) -> bool:
        return self._charge < self._capacity

    def set_sending(self, sending: bool) -> None:
        if sending != self.is_sending:
            self.is_sending = sending
            self.notify_block_update()

    def set_receiving(self, receiving: bool) -> None:
        changed = receiving != self.is_receiving
        self.is_receiving = receiving
        if receiving and self.is_sending:
            self.is_sending = False
            changed = True
        if changed:
            self.notify_block_update()

    def fill(self, amount: int) -> int:
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        before = self._charge
        total = before + amount
        self._charge = min(total, self._capacity)
        if self._charge != before:
            self.update_transfer_state()
        return total - self._charge

    def drain(self, amount: int) -> int:
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        drained = min(amount, self._charge)
        if drained:
            self._charge -= drained
            self.mark_dirty()
        return drained

    def update_transfer_state(self) -> None:
        self.transfer_efficiency = self._efficiency
        self.mark_dirty()

    # -- Persistence --

    def serialize(self) -> Record:
        return {"charge": self._charge}

    def restore(self, record: Record) -> None:
        """Apply a stored charge. A missing key means a fresh, empty device."""
        raw = record.get("charge", 0)
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise SnapshotError(f"charge must be an integer, got {raw!r}")
        charge = max(0, min(raw, self._capacity))
        if charge != raw:
            logger.warning(
                "clamped restored charge %d to %d for %r", raw, charge, self
            )
        self._charge = charge

    def on_load(self) -> None:
        self.update_transfer_state()
