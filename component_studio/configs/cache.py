"""
Cache configuration settings.

Redis connection and freshness policy for the session cache.

Dependencies: pydantic, pydantic_settings
System role: Cache-aside layer configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheSettings(BaseSettings):
    """Redis cache configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REDIS_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    socket_timeout: float = Field(
        default=0.5,
        description="Seconds before a cache call is abandoned and treated as a miss",
    )
    list_ttl_seconds: int = Field(
        default=300,
        description="TTL for the per-owner session list key",
    )
