"""SourceDevice - the active half of an energy relay."""
from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Mapping

from relay import Facing, Record
from relay_energy.actuator import RefillActuator
from relay_energy.config import RelayConfig
from relay_energy.effects import FilledEffect
from relay_energy.transfer import ChargedBlock, EnergyTransfer

logger = logging.getLogger(__name__)

IDLE = "idle"
RELAYING = "relaying"
BLOCKED = "blocked"


class SourceDevice(ChargedBlock):
    """Pushes its charge into the EnergyTransfer block it faces.

    The neighbor and the refill actuator (the block directly above) are
    looked up on every use, never held, so replacing or removing either
    takes effect on the next lookup.

    A source never accepts relayed charge: ``can_receive`` is always
    False and ``receive_limit`` is 0. It is still filled directly, by a
    refill actuator or by outside code.
    """

    kind = "source"

    def __init__(
        self,
        facing: Facing | None = Facing.NORTH,
        config: RelayConfig | Mapping[str, Any] | None = None,
    ) -> None:
        if config is None:
            config = RelayConfig()
        elif not isinstance(config, RelayConfig):
            config = RelayConfig(**config)
        self.config = config
        super().__init__(
            self.config.capacity,
            self.config.efficiency,
            facing if facing is not None else Facing.NORTH,
        )
        self._blocked = False

    @property
    def send_limit(self) -> int:
        return self.config.send_limit

    def settings(self) -> Record:
        return {"config": asdict(self.config)}

    @property
    def state(self) -> str:
        if self.is_sending:
            return RELAYING
        return BLOCKED if self._blocked else IDLE

    def receive_limit(self) -> int:
        return 0

    def can_receive(self) -> bool:
        return False

    def set_receiving(self, receiving: bool) -> None:
        if receiving:
            self.set_sending(False)

    # -- Lookups --

    def neighbor(self) -> EnergyTransfer | None:
        if self.world is None or self.pos is None or self.facing is None:
            return None
        return self.world.find(self.pos, self.facing, EnergyTransfer)

    def actuator(self) -> RefillActuator | None:
        if self.world is None or self.pos is None:
            return None
        return self.world.find(self.pos, Facing.UP, RefillActuator)

    def can_refill(self) -> bool:
        actuator = self.actuator()
        return actuator is not None and not actuator.is_active

    # -- Transfer state machine --

    def tick(self, world_time: int) -> None:
        if self.is_sending and world_time % self.config.interval == 0:
            self.attempt_transfer()

    def update_transfer_state(self) -> None:
        self._blocked = False
        neighbor = self.neighbor()
        if neighbor is None:
            self.transfer_efficiency = self.efficiency
            self.set_sending(False)
        else:
            can_transfer = self.can_send() and neighbor.can_receive()
            self.set_sending(can_transfer)
            neighbor.set_receiving(can_transfer)
            self.transfer_efficiency = self.efficiency * neighbor.efficiency
        self.mark_dirty()

    def attempt_transfer(self) -> None:
        neighbor = self.neighbor()
        if neighbor is None or not neighbor.can_receive():
            self._stop(neighbor, refill=False)
            return
        if not self.can_send():
            self._stop(neighbor, refill=True)
            return

        amount = self.drain(min(self.send_limit, neighbor.receive_limit()))
        delivered = int(amount * self.transfer_efficiency)
        overfill = neighbor.fill(delivered)
        if overfill > 0:
            self.fill(overfill)
        self.mark_dirty()

        if not neighbor.can_receive():
            self._stop(neighbor, refill=False)
        elif not self.can_send():
            self._stop(neighbor, refill=True)

    def _stop(self, neighbor: EnergyTransfer | None, refill: bool) -> None:
        if refill and self.can_refill():
            actuator = self.actuator()
            if actuator is not None:
                actuator.activate()
        self.set_sending(False)
        if neighbor is not None:
            neighbor.set_receiving(False)
        self._blocked = True
        logger.debug(
            "relay at %s stopped (neighbor=%s, refill=%s)",
            self.pos, "absent" if neighbor is None else "present", refill,
        )
        if self.pos is not None:
            self.emit(FilledEffect(self.pos))
        self.notify_block_update()
