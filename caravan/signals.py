"""In-memory pub/sub bus for simulation events, flushed once per tick."""
from __future__ import annotations

from typing import Any, Callable

_Handler = Callable[[str, dict[str, Any]], None]

PRODUCED = "produced"
CONSTRUCTED = "constructed"
UNIT_TRANSITION = "unit_transition"
COMMAND_ACCEPTED = "command_accepted"
COMMAND_REJECTED = "command_rejected"


class SignalBus:

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal_name: str, handler: _Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: _Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, signal_name: str, **data: Any) -> None:
        self._queue.append((signal_name, data))

    def pending(self) -> int:
        return len(self._queue)

    def drain(self) -> list[tuple[str, dict[str, Any]]]:
        """Take the queued signals without delivering them."""
        queued = self._queue
        self._queue = []
        return queued

    def deliver(self, queued: list[tuple[str, dict[str, Any]]]) -> None:
        for signal_name, data in queued:
            for handler in self._subscribers.get(signal_name, []):
                handler(signal_name, data)

    def flush(self) -> None:
        self.deliver(self.drain())

    def clear(self) -> None:
        self._queue.clear()
