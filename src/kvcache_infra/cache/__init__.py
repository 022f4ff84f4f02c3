"""Cache client and key-value store transports."""

from kvcache_infra.cache.client import CacheClient, encode_value
from kvcache_infra.cache.factory import create_cache_client, create_transport, get_cache_client
from kvcache_infra.cache.memory_transport import InMemoryTransport
from kvcache_infra.cache.redis_transport import RedisTransport

__all__ = [
    "CacheClient",
    "InMemoryTransport",
    "RedisTransport",
    "create_cache_client",
    "create_transport",
    "encode_value",
    "get_cache_client",
]
