"""Process-local implementation of Transport."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from kvcache_core.constants import EVENT_CONNECT
from kvcache_core.exceptions import TransportError
from kvcache_core.interfaces.transport import EventHandler
from kvcache_infra.cache.events import TransportEvents


@dataclass(frozen=True, slots=True)
class _Entry:
    value: str
    expires_at: float


class InMemoryTransport:
    """Dictionary-backed store with SETEX expiry, for development and tests."""

    def __init__(self, now_provider: Callable[[], float] | None = None) -> None:
        self._rows: dict[str, _Entry] = {}
        self._events = TransportEvents()
        self._now = now_provider or time.monotonic

    def on(self, event: str, handler: EventHandler) -> None:
        """Register an observer for ``connect`` or ``error``."""
        self._events.on(event, handler)

    def connect(self) -> None:
        """Nothing to dial; report the connection as established."""
        self._events.emit(EVENT_CONNECT)

    async def get(self, key: str) -> str | None:
        row = self._rows.get(key)
        if row is None:
            return None
        if row.expires_at <= self._now():
            self._rows.pop(key, None)
            return None
        return row.value

    async def setex(self, key: str, seconds: int, value: str) -> None:
        """Store value until seconds have elapsed; rejects what Redis rejects."""
        if seconds <= 0:
            msg = f"SETEX '{key}' failed: invalid expire time {seconds}"
            raise TransportError(msg)
        self._rows[key] = _Entry(value=value, expires_at=self._now() + seconds)

    async def delete(self, key: str) -> None:
        self._rows.pop(key, None)

    async def close(self) -> None:
        """Nothing to release."""
