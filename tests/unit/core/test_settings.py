"""Tests for Settings configuration."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from kvcache_core.config.settings import Settings, get_settings


@pytest.mark.unit
class TestSettings:
    """Test Settings validation and defaults."""

    def test_default_settings(self) -> None:
        """Settings loads with no environment and correct defaults."""
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.cache_backend == "redis"
        assert s.redis_url == "redis://localhost:6379/0"
        assert s.redis_socket_timeout == 5.0
        assert s.default_ttl_seconds == 3600
        assert s.log_level == "INFO"
        assert s.log_format == "console"

    def test_env_prefix(self) -> None:
        """KVCACHE_-prefixed variables override defaults."""
        env = {
            "KVCACHE_CACHE_BACKEND": "memory",
            "KVCACHE_REDIS_URL": "rediss://cache.internal:6380/2",
            "KVCACHE_LOG_FORMAT": "json",
        }
        with patch.dict(os.environ, env, clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.cache_backend == "memory"
        assert s.redis_url == "rediss://cache.internal:6380/2"
        assert s.log_format == "json"

    def test_invalid_redis_url_raises(self) -> None:
        """A non-redis URL is rejected for the redis backend."""
        env = {"KVCACHE_REDIS_URL": "http://localhost:6379"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ValidationError, match="redis_url must start with"):
                Settings(_env_file=None)  # type: ignore[call-arg]

    def test_memory_backend_ignores_url(self) -> None:
        """The URL check only applies when Redis is the backend."""
        s = Settings(  # type: ignore[call-arg]
            _env_file=None, cache_backend="memory", redis_url="not-a-url"
        )
        assert s.cache_backend == "memory"

    def test_unknown_backend_raises(self) -> None:
        """Only redis and memory backends exist."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, cache_backend="memcached")  # type: ignore[call-arg, arg-type]

    @pytest.mark.parametrize("field", ["redis_socket_timeout", "redis_socket_connect_timeout"])
    def test_timeouts_must_be_positive(self, field: str) -> None:
        """Socket timeouts of zero are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 0})  # type: ignore[call-arg, arg-type]

    @pytest.mark.parametrize("level", ["verbose", "INFOO", "10"])
    def test_invalid_log_level_raises(self, level: str) -> None:
        """A level name logging does not know is rejected, not silently downgraded."""
        with patch.dict(os.environ, {"KVCACHE_LOG_LEVEL": level}, clear=True):
            with pytest.raises(ValidationError, match="log_level"):
                Settings(_env_file=None)  # type: ignore[call-arg]

    def test_log_level_is_case_insensitive(self) -> None:
        """Lower-case level names from the environment are normalized."""
        with patch.dict(os.environ, {"KVCACHE_LOG_LEVEL": "debug"}, clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.log_level == "DEBUG"

    def test_get_settings_is_cached(self) -> None:
        """get_settings returns one shared instance."""
        get_settings.cache_clear()
        try:
            with patch.dict(os.environ, {"KVCACHE_CACHE_BACKEND": "memory"}, clear=True):
                assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
