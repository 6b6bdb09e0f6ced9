"""Presentation events emitted by relay devices."""
from __future__ import annotations

from dataclasses import dataclass

from relay import Coord


@dataclass(frozen=True)
class FilledEffect:
    """A relay stopped: the neighbor filled up, went away, or the source ran dry."""

    position: Coord


@dataclass(frozen=True)
class RefillTriggered:
    position: Coord
