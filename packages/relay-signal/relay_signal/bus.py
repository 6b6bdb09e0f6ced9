"""In-memory typed event bus with per-tick flush semantics."""
from __future__ import annotations

from typing import Any, Callable

from relay_signal.events import BlockUpdate

_Handler = Callable[[Any], None]


class EffectBus:
    """Queues events and dispatches them by exact type on :meth:`flush`.

    ``BlockUpdate`` events for the same position are coalesced while
    queued: the first occurrence keeps its place in the queue and takes
    the latest payload.
    """

    def __init__(self) -> None:
        self._subscribers: dict[type, list[_Handler]] = {}
        self._queue: list[Any] = []
        self._updates: dict[tuple[int, ...], int] = {}

    def subscribe(self, event_type: type, handler: _Handler) -> None:
        self._subscribers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: type, handler: _Handler) -> None:
        handlers = self._subscribers.get(event_type)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, event: Any) -> None:
        if isinstance(event, BlockUpdate):
            index = self._updates.get(event.position)
            if index is not None:
                self._queue[index] = event
                return
            self._updates[event.position] = len(self._queue)
        self._queue.append(event)

    def pending(self) -> int:
        return len(self._queue)

    def flush(self) -> None:
        snapshot = self._queue
        self._queue = []
        self._updates = {}
        for event in snapshot:
            for handler in list(self._subscribers.get(type(event), [])):
                handler(event)

    def clear(self) -> None:
        self._queue.clear()
        self._updates.clear()
