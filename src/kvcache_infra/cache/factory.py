"""Build transports and cache clients from settings."""

from __future__ import annotations

import asyncio

import structlog

from kvcache_core.config.settings import Settings, get_settings
from kvcache_core.interfaces.transport import Transport
from kvcache_infra.cache.client import CacheClient
from kvcache_infra.cache.memory_transport import InMemoryTransport
from kvcache_infra.cache.redis_transport import RedisTransport

logger = structlog.get_logger()

_cache_client: CacheClient | None = None
_cache_client_signature: tuple[str, str] | None = None
# Strong references so replaced clients finish closing before being collected.
_closing: set[asyncio.Task[None]] = set()


def create_transport(settings: Settings) -> Transport:
    """Return the transport selected by ``settings.cache_backend``."""
    if settings.cache_backend == "memory":
        return InMemoryTransport()
    return RedisTransport.from_url(
        settings.redis_url,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_connect_timeout,
    )


def create_cache_client(settings: Settings) -> CacheClient:
    """Build a new client; prefer passing the result to consumers explicitly."""
    return CacheClient(create_transport(settings))


def get_cache_client() -> CacheClient:
    """Return the shared client, rebuilt only when the backend configuration changes.

    A replaced client is closed in the background when an event loop is
    running. Without one its pool stays open until process teardown.
    """
    global _cache_client, _cache_client_signature
    settings = get_settings()
    signature = (settings.cache_backend, settings.redis_url)
    if _cache_client is None or _cache_client_signature != signature:
        previous = _cache_client
        _cache_client = create_cache_client(settings)
        _cache_client_signature = signature
        if previous is not None:
            _close_replaced(previous)
    return _cache_client


def _close_replaced(client: CacheClient) -> None:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.debug("cache_client_replaced_without_close")
        return
    task = loop.create_task(client.close())
    _closing.add(task)
    task.add_done_callback(_closing.discard)
