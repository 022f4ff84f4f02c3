"""Custom exception hierarchy for kvcache."""

from __future__ import annotations


class KVCacheError(Exception):
    """Base exception for all kvcache errors."""


class CacheConnectionError(KVCacheError):
    """Reported through the transport's error event when the store is unreachable."""


class TransportError(KVCacheError):
    """Raised when a get/set/delete round trip to the store fails."""
