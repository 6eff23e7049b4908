"""
Redis cache gateway.

Thin get/set/delete wrapper over redis.asyncio with JSON values and the two
session key shapes. Every failure (connection, timeout, bad payload) is
logged and downgraded to a miss or a no-op: the cache never fails a request.

Dependencies: redis, component_studio.configs
System role: Cache-aside fast path in front of the session store
"""

import json
import logging
from typing import Any
from uuid import UUID

from redis.asyncio import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

# Failures the gateway absorbs
CACHE_FAULTS = (RedisError, OSError, TypeError, ValueError)


class CacheGateway:
    """
    Best-effort JSON cache over Redis.

    Constructed once at application startup (connect) and released at
    shutdown (close); request handlers receive it through dependency
    injection.

    Usage:
        gateway = CacheGateway.from_url("redis://localhost:6379/0")
        await gateway.connect()
        await gateway.set(CacheGateway.list_key("u1"), [...], ttl=300)
        cached = await gateway.get(CacheGateway.list_key("u1"))
        await gateway.close()
    """

    def __init__(self, client: Redis) -> None:
        """
        Initialize gateway around an existing client.

        Args:
            client: redis.asyncio client (decode_responses=True)
        """
        self._client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float = 0.5) -> "CacheGateway":
        """
        Build a gateway for a Redis URL without opening a connection.

        Args:
            url: Redis connection URL
            socket_timeout: Seconds before a call is abandoned

        Returns:
            CacheGateway: Gateway with a lazily-connecting client
        """
        client = Redis.from_url(
            url,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
            decode_responses=True,
        )
        return cls(client)

    @staticmethod
    def list_key(owner_id: str) -> str:
        """Key holding an owner's session summaries."""
        return f"sessions:{owner_id}"

    @staticmethod
    def entity_key(session_id: UUID | str, owner_id: str) -> str:
        """Key holding one full session."""
        return f"session:{session_id}:{owner_id}"

    async def connect(self) -> bool:
        """
        Verify the backend is reachable.

        An unreachable cache is not fatal; the gateway keeps operating in
        degraded (always-miss) mode and reconnects on later calls.

        Returns:
            bool: True if the backend answered
        """
        reachable = await self.ping()
        if reachable:
            logger.info(f"{__name__}:connect - Redis cache reachable")
        else:
            logger.warning(f"{__name__}:connect - Redis cache unreachable, running store-only")
        return reachable

    async def close(self) -> None:
        """Release the connection pool."""
        try:
            await self._client.aclose()
        except CACHE_FAULTS as e:
            logger.warning(f"{__name__}:close - {type(e).__name__}: {e}")

    async def ping(self) -> bool:
        """Return True if the backend answers PING."""
        try:
            return bool(await self._client.ping())
        except CACHE_FAULTS as e:
            logger.warning(f"{__name__}:ping - {type(e).__name__}: {e}")
            return False

    async def get(self, key: str) -> Any | None:
        """
        Read and decode a JSON value.

        Args:
            key: Cache key

        Returns:
            Decoded value, or None on miss or any cache fault
        """
        try:
            raw = await self._client.get(key)
            if raw is None:
                return None
            return json.loads(raw)
        except CACHE_FAULTS as e:
            logger.warning(
                "Cache get failed, treating as miss",
                extra={"key": key, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            return None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """
        Encode and store a JSON value.

        Args:
            key: Cache key
            value: JSON-serializable value
            ttl: Expiry in seconds; None stores without expiry
        """
        try:
            payload = json.dumps(value)
            await self._client.set(key, payload, ex=ttl)
        except CACHE_FAULTS as e:
            logger.warning(
                "Cache set failed, skipping",
                extra={"key": key, "error_type": type(e).__name__, "error_msg": str(e)},
            )

    async def delete(self, key: str) -> None:
        """
        Remove a key.

        Args:
            key: Cache key
        """
        try:
            await self._client.delete(key)
        except CACHE_FAULTS as e:
            logger.warning(
                "Cache delete failed, skipping",
                extra={"key": key, "error_type": type(e).__name__, "error_msg": str(e)},
            )
