"""Relay configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RelayConfig:
    """Immutable configuration for a source device.

    Attributes:
        capacity: Maximum storable charge.
        send_limit: Maximum charge moved per transfer attempt.
        efficiency: The device's own loss factor, in (0, 1].
        interval: Transfer attempts run when world_time is a multiple of this.
    """

    capacity: int = 128
    send_limit: int = 16
    efficiency: float = 1.0
    interval: int = 5

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError(f"capacity must be > 0, got {self.capacity}")
        if self.send_limit <= 0:
            raise ValueError(f"send_limit must be > 0, got {self.send_limit}")
        if not 0.0 < self.efficiency <= 1.0:
            raise ValueError(f"efficiency must be in (0, 1], got {self.efficiency}")
        if self.interval <= 0:
            raise ValueError(f"interval must be > 0, got {self.interval}")
