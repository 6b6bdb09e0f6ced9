"""relay-energy - Point-to-point energy relays for the block world."""
from __future__ import annotations

from relay_energy.actuator import RefillActuator
from relay_energy.config import RelayConfig
from relay_energy.effects import FilledEffect, RefillTriggered
from relay_energy.receiver import Receiver
from relay_energy.source import BLOCKED, IDLE, RELAYING, SourceDevice
from relay_energy.systems import connect_relays, make_actuator_system, make_relay_system
from relay_energy.transfer import ChargedBlock, EnergyTransfer

__all__ = [
    "EnergyTransfer",
    "ChargedBlock",
    "SourceDevice",
    "Receiver",
    "RefillActuator",
    "RelayConfig",
    "FilledEffect",
    "RefillTriggered",
    "IDLE",
    "RELAYING",
    "BLOCKED",
    "make_relay_system",
    "make_actuator_system",
    "connect_relays",
]
