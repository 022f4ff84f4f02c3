"""Public interface re-exports for kvcache_core."""

from kvcache_core.interfaces.cache import CacheStore, CacheValue
from kvcache_core.interfaces.transport import EventHandler, Transport

__all__ = [
    "CacheStore",
    "CacheValue",
    "EventHandler",
    "Transport",
]
