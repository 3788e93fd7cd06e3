"""Minimal synchronous publish/subscribe support."""

from collections import defaultdict
from collections.abc import Callable
from typing import Any

Listener = Callable[..., Any]


class EventEmitter:
    """Named events with listeners called synchronously in subscription order.

    Exceptions raised by a listener propagate to the code that emitted.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[tuple[Listener, bool]]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> "EventEmitter":
        """Subscribe ``listener`` to ``event``; returns self for chaining."""
        self._listeners[event].append((listener, False))
        return self

    def once(self, event: str, listener: Listener) -> "EventEmitter":
        """Subscribe ``listener`` for the next emission of ``event`` only."""
        self._listeners[event].append((listener, True))
        return self

    def off(self, event: str, listener: Listener) -> "EventEmitter":
        """Remove the most recently added subscription of ``listener`` to ``event``."""
        entries = self._listeners.get(event, [])
        for idx in range(len(entries) - 1, -1, -1):
            if entries[idx][0] == listener:
                del entries[idx]
                break
        return self

    def remove_all_listeners(self, event: str | None = None) -> "EventEmitter":
        """Remove every listener, or only those of ``event``."""
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)
        return self

    def listeners(self, event: str) -> list[Listener]:
        """Return a copy of the listeners subscribed to ``event``."""
        return [listener for listener, _ in self._listeners.get(event, [])]

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of ``event`` with ``args``.

        Returns:
            True if the event had listeners
        """
        entries = self._listeners.get(event)
        if not entries:
            return False
        snapshot = list(entries)
        self._listeners[event] = [entry for entry in entries if not entry[1]]
        for listener, _ in snapshot:
            listener(*args)
        return True
