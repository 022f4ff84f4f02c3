"""Connection-aware cache client over a key-value store transport."""

from __future__ import annotations

import math
from collections.abc import Awaitable, Callable
from typing import TypeVar
from decimal import Decimal

import structlog

from kvcache_core.constants import EVENT_CONNECT, EVENT_ERROR
from kvcache_core.exceptions import TransportError
from kvcache_core.interfaces.cache import CacheValue
from kvcache_core.interfaces.transport import Transport

logger = structlog.get_logger()

T = TypeVar("T")


def encode_value(value: CacheValue) -> str:
    """Convert a value to the string stored in the key-value store.

    Booleans are sent as ``"true"``/``"false"`` and floats use the shortest
    JavaScript-style form (``1e+21``, ``0.00001``, ``Infinity``), so values
    written by other clients of the same store read back identically.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    text = repr(value)
    mantissa, sep, exponent = text.partition("e")
    if not sep:
        return text.removesuffix(".0")
    exp = int(exponent)
    # Exponent form only below 1e-6 and from 1e21 up
    if -7 < exp < 21:
        return format(Decimal(text), "f")
    sign = "+" if exp > 0 else "-"
    return f"{mantissa}e{sign}{abs(exp)}"


class CacheClient:
    """Typed get/set/delete surface over a transport, with liveness tracking.

    The liveness flag changes only when the transport reports ``connect`` or
    ``error``. Requests are never gated on it: they are attempted regardless
    and fail with ``TransportError`` when the round trip fails.
    """

    def __init__(self, transport: Transport) -> None:
        """Register connection observers and start the connection attempt."""
        self._transport = transport
        # Optimistic until the first event: a pending connection reads as alive.
        self._connected = True
        transport.on(EVENT_ERROR, self._on_error)
        transport.on(EVENT_CONNECT, self._on_connect)
        transport.connect()

    def is_alive(self) -> bool:
        """Return the liveness reported by the most recent connection event."""
        return self._connected

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key, or None if the store does not hold it."""
        return await self._request("GET", key, lambda: self._transport.get(key))

    async def set(self, key: str, value: CacheValue, duration_seconds: int) -> None:
        """Store a value that the store expires after duration_seconds."""
        encoded = encode_value(value)
        await self._request(
            "SETEX",
            key,
            lambda: self._transport.setex(key, duration_seconds, encoded),
        )

    async def delete(self, key: str) -> None:
        """Delete a key; a missing key is not an error."""
        await self._request("DEL", key, lambda: self._transport.delete(key))

    async def close(self) -> None:
        """Release the transport's connection resources."""
        await self._transport.close()

    def _on_error(self, error: BaseException) -> None:
        self._connected = False
        logger.error("cache_connection_failed", error=str(error) or repr(error))

    def _on_connect(self) -> None:
        self._connected = True
        logger.debug("cache_connected")

    async def _request(self, command: str, key: str, call: Callable[[], Awaitable[T]]) -> T:
        try:
            return await call()
        except TransportError:
            raise
        except Exception as exc:
            msg = f"{command} '{key}' failed: {exc}"
            raise TransportError(msg) from exc
