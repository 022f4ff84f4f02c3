"""Abstract transport interface for the remote key-value store."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

EventHandler = Callable[..., Any]


@runtime_checkable
class Transport(Protocol):
    """Connection to a key-value store that reports its health through events.

    Observers registered for ``"connect"`` are called with no arguments;
    observers registered for ``"error"`` receive the exception. Request
    methods raise ``TransportError`` when the round trip fails.
    """

    def on(self, event: str, handler: EventHandler) -> None:
        """Register an observer for a transport event."""
        ...

    def connect(self) -> None:
        """Start the connection attempt without waiting for it."""
        ...

    async def get(self, key: str) -> str | None:
        """Issue GET for key."""
        ...

    async def setex(self, key: str, seconds: int, value: str) -> None:
        """Issue SETEX so the store expires key after seconds."""
        ...

    async def delete(self, key: str) -> None:
        """Issue DEL for key."""
        ...

    async def close(self) -> None:
        """Release the underlying connection resources."""
        ...
