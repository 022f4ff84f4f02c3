"""Abstract cache interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

CacheValue = str | int | float | bool


@runtime_checkable
class CacheStore(Protocol):
    """Typed surface consumers depend on; implementations can be swapped."""

    def is_alive(self) -> bool:
        """Return the last-observed connection health."""
        ...

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key, or None if not found."""
        ...

    async def set(self, key: str, value: CacheValue, duration_seconds: int) -> None:
        """Store a value that expires after duration_seconds."""
        ...

    async def delete(self, key: str) -> None:
        """Delete a key from the cache."""
        ...
