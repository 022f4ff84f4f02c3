"""Redis-backed implementation of Transport."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from kvcache_core.constants import EVENT_CONNECT, EVENT_ERROR
from kvcache_core.exceptions import CacheConnectionError, TransportError
from kvcache_core.interfaces.transport import EventHandler
from kvcache_infra.cache.events import TransportEvents

logger = structlog.get_logger()

T = TypeVar("T")

_CONNECTION_ERRORS = (RedisConnectionError, RedisTimeoutError, OSError)


class RedisTransport:
    """Connection to a Redis server that reports health as connect/error events.

    redis-py reconnects transparently from its pool, so health is observed
    from command outcomes: ``connect`` fires the first time the server
    answers after being unreachable (or unknown), and ``error`` fires on
    every connection-level failure.
    """

    def __init__(self, redis: Redis) -> None:  # type: ignore[type-arg]
        """Initialize with a redis-py asyncio client."""
        self._redis = redis
        self._events = TransportEvents()
        self._reachable: bool | None = None
        self._connect_task: asyncio.Task[None] | None = None

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        socket_timeout: float | None = None,
        socket_connect_timeout: float | None = None,
    ) -> RedisTransport:
        """Build a transport over a client created from a Redis URL."""
        client = Redis.from_url(
            url,
            encoding="utf-8",
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_connect_timeout,
        )
        return cls(client)

    def on(self, event: str, handler: EventHandler) -> None:
        """Register an observer for ``connect`` or ``error``."""
        self._events.on(event, handler)

    def connect(self) -> None:
        """Schedule a PING probe on the running loop and return immediately.

        Outside a running loop the probe is skipped; the first command then
        produces the first connection event.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("redis_connect_deferred", reason="no running event loop")
            return
        self._connect_task = loop.create_task(self._probe())

    async def _probe(self) -> None:
        try:
            await self._redis.ping()
        except (RedisError, OSError) as exc:
            self._mark_unreachable(exc)
        else:
            self._mark_reachable()

    async def get(self, key: str) -> str | None:
        """Issue GET; bytes replies are decoded as UTF-8."""
        value = await self._execute("GET", key, lambda: self._redis.get(key))
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    async def setex(self, key: str, seconds: int, value: str) -> None:
        """Issue SETEX; Redis rejects non-positive expiries."""
        await self._execute("SETEX", key, lambda: self._redis.setex(key, seconds, value))

    async def delete(self, key: str) -> None:
        """Issue DEL; deleting a missing key is not an error."""
        await self._execute("DEL", key, lambda: self._redis.delete(key))

    async def close(self) -> None:
        """Cancel a pending probe and close the connection pool."""
        if self._connect_task is not None and not self._connect_task.done():
            self._connect_task.cancel()
        await self._redis.aclose()  # type: ignore[attr-defined]

    async def _execute(self, command: str, key: str, call: Callable[[], Awaitable[T]]) -> T:
        try:
            result = await call()
        except _CONNECTION_ERRORS as exc:
            self._mark_unreachable(exc)
            msg = f"{command} '{key}' failed: {exc}"
            raise TransportError(msg) from exc
        except RedisError as exc:
            # The server answered, so the connection itself is up.
            self._mark_reachable()
            msg = f"{command} '{key}' failed: {exc}"
            raise TransportError(msg) from exc
        self._mark_reachable()
        return result

    def _mark_reachable(self) -> None:
        if self._reachable is True:
            return
        self._reachable = True
        self._events.emit(EVENT_CONNECT)

    def _mark_unreachable(self, exc: BaseException) -> None:
        self._reachable = False
        error = CacheConnectionError(str(exc) or type(exc).__name__)
        error.__cause__ = exc
        self._events.emit(EVENT_ERROR, error)
