"""Application settings using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kvcache_core.constants import REDIS_URL_SCHEMES

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Central configuration for kvcache."""

    model_config = SettingsConfigDict(env_prefix="KVCACHE_", env_file=".env", extra="ignore")

    # --- Cache ---
    cache_backend: Literal["redis", "memory"] = Field(
        default="redis",
        description="Key-value store backend: 'redis' for a server, 'memory' for process-local",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    redis_socket_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Socket timeout per Redis command in seconds",
    )
    redis_socket_connect_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Socket connect timeout in seconds",
    )
    default_ttl_seconds: int = Field(
        default=3600,
        description="Expiry used by the CLI when --ttl is omitted",
    )

    # --- Logging ---
    log_level: LogLevel = Field(
        default="INFO",
        description="Root log level (case-insensitive in the environment)",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for collectors",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept lower-case level names from the environment."""
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def validate_redis_url(self) -> Settings:
        """Reject URLs redis-py cannot open when the redis backend is selected."""
        if self.cache_backend == "redis" and not self.redis_url.startswith(REDIS_URL_SCHEMES):
            msg = f"redis_url must start with one of {', '.join(REDIS_URL_SCHEMES)}"
            raise ValueError(msg)
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
