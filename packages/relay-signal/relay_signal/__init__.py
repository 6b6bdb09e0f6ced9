"""relay-signal - In-process effect bus for the block world."""
from __future__ import annotations

from relay_signal.bus import EffectBus
from relay_signal.events import BlockUpdate
from relay_signal.systems import connect_world, make_replica_handler, make_signal_system

__all__ = [
    "EffectBus",
    "BlockUpdate",
    "connect_world",
    "make_replica_handler",
    "make_signal_system",
]
