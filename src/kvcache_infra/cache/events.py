"""Observer registry shared by the transport implementations."""

from __future__ import annotations

from collections import defaultdict

from kvcache_core.constants import TRANSPORT_EVENTS
from kvcache_core.interfaces.transport import EventHandler


class TransportEvents:
    """Holds the observers registered for ``connect`` and ``error``."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def on(self, event: str, handler: EventHandler) -> None:
        """Register handler for event; unknown event names are rejected."""
        if event not in TRANSPORT_EVENTS:
            msg = f"Unknown transport event '{event}', expected one of {TRANSPORT_EVENTS}"
            raise ValueError(msg)
        self._handlers[event].append(handler)

    def emit(self, event: str, *args: object) -> None:
        """Call every handler registered for event, in registration order."""
        for handler in list(self._handlers.get(event, ())):
            handler(*args)
