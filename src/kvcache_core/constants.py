"""Shared constants for kvcache."""

from __future__ import annotations

# Transport event names
EVENT_CONNECT = "connect"
EVENT_ERROR = "error"

TRANSPORT_EVENTS = (EVENT_CONNECT, EVENT_ERROR)

# URL schemes accepted by redis.asyncio.from_url
REDIS_URL_SCHEMES = ("redis://", "rediss://", "unix://")

# Printed by the CLI for a missing key, as redis-cli does
NIL_DISPLAY = "(nil)"
