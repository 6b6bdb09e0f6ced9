"""Receiver - a passive charge buffer that accepts relayed charge."""
from __future__ import annotations

from relay import Facing, Record
from relay_energy.transfer import ChargedBlock


class Receiver(ChargedBlock):
    """Generic receiving device.

    Its per-call receive limit is the free room in the buffer unless
    *receive_limit* fixes it. A fixed limit larger than the free room makes
    the sender's fill overflow, and the overfill flows back to the sender.
    """

    kind = "receiver"

    def __init__(
        self,
        capacity: int = 128,
        efficiency: float = 1.0,
        receive_limit: int | None = None,
        facing: Facing | None = None,
    ) -> None:
        super().__init__(capacity, efficiency, facing)
        if receive_limit is not None and receive_limit < 0:
            raise ValueError(f"receive_limit must be >= 0, got {receive_limit}")
        self._receive_limit = receive_limit

    def settings(self) -> Record:
        return {
            "capacity": self.capacity,
            "efficiency": self.efficiency,
            "receive_limit": self._receive_limit,
        }

    def receive_limit(self) -> int:
        if self._receive_limit is not None:
            return self._receive_limit
        return super().receive_limit()
