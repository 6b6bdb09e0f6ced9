"""Event records carried by the effect bus."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from relay import Coord


@dataclass(frozen=True)
class BlockUpdate:
    """The block at ``position`` changed; ``payload`` is its sync record."""

    position: Coord
    payload: dict[str, Any] = field(default_factory=dict)
