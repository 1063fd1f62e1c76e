"""Redis-based cache service for cached HTTP reads.

Provides async Redis caching with TTL support and prefix invalidation.
Every command is bounded by a short timeout; a slow or unreachable Redis
is treated as a miss so callers fall through to the database. Key format
lives in app.infrastructure.cache.keys (DRY).
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from app.core.config import Settings, get_settings
from app.domain.exceptions import CacheUnavailableException
from app.infrastructure.cache.keys import escape_match_pattern

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Seconds to wait before trying to reconnect after Redis went away.
RECONNECT_INTERVAL_SECONDS = 30.0
# Prefix invalidation walks the keyspace, so it gets a longer bound than single commands.
INVALIDATION_TIMEOUT_FACTOR = 10
UNLINK_CHUNK_SIZE = 500


class CacheService:
    """Async Redis cache service with TTL support.

    Caches product listings, category lists and sales rankings. Uses
    app.core.config for connection settings. Call connect() at startup
    and disconnect() at shutdown. Public methods never raise: reads
    degrade to a miss, writes to False, deletions to 0.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI (treated as connected).
            settings: Optional settings; defaults to get_settings().
        """
        self.settings = settings or get_settings()
        self.redis = redis_client
        self.timeout = self.settings.cache_operation_timeout_seconds
        self._connected = redis_client is not None
        self._next_reconnect_at = 0.0
        # Serializes connect/reconnect so concurrent callers open one client.
        self._connect_lock = asyncio.Lock()

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup; failure disables the cache."""
        async with self._connect_lock:
            if not self._is_connected():
                await self._open()

    async def _open(self) -> None:
        """Create a client and ping it. Caller holds _connect_lock."""
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=self.settings.redis_password.get_secret_value()
            if self.settings.redis_password
            else None,
            decode_responses=True,
            socket_connect_timeout=self.timeout,
            socket_timeout=self.timeout,
            socket_keepalive=True,
            max_connections=self.settings.redis_max_connections,
        )
        try:
            await asyncio.wait_for(client.ping(), self.timeout)
        except (redis.RedisError, OSError, asyncio.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            await _close_quietly(client)
            await self._drop_client()
            self._next_reconnect_at = time.monotonic() + RECONNECT_INTERVAL_SECONDS
            return
        await self._drop_client()
        self.redis = client
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        async with self._connect_lock:
            self._next_reconnect_at = 0.0
            if self.redis:
                await self._drop_client()
                logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected, or a reconnect attempt is due."""
        return self._is_connected() or self._reconnect_due()

    def _is_connected(self) -> bool:
        return self._connected and self.redis is not None

    def _reconnect_due(self) -> bool:
        # Zero means no connection was ever attempted (cache disabled).
        return 0 < self._next_reconnect_at <= time.monotonic()

    async def _drop_client(self) -> None:
        """Close and forget the current client, if any."""
        client, self.redis = self.redis, None
        self._connected = False
        if client is not None:
            await _close_quietly(client)

    async def _ensure_connected(self) -> bool:
        """Reconnect when the retry window has elapsed. Returns connectivity."""
        if self._is_connected():
            return True
        if not self._reconnect_due():
            return False
        return await self._reconnect()

    async def _reconnect(self, broken: redis.Redis | None = None) -> bool:
        """Open a fresh client once, however many callers noticed the outage.

        broken is the client a caller saw fail; it is replaced only if it is
        still current, so a client installed by another caller is kept.
        """
        async with self._connect_lock:
            if broken is not None and self.redis is broken:
                await self._open()
            elif not self._is_connected() and self._reconnect_due():
                await self._open()
            return self._is_connected()

    async def _mark_unavailable(self, failed: redis.Redis) -> None:
        """Drop failed (if still current) and wait out the retry window."""
        async with self._connect_lock:
            if self.redis is not failed:
                return
            await self._drop_client()
            self._next_reconnect_at = time.monotonic() + RECONNECT_INTERVAL_SECONDS

    async def _execute(
        self,
        operation: str,
        call: Callable[[redis.Redis], Awaitable[T]],
        timeout: float | None = None,
    ) -> T:
        """Run call against Redis within the timeout.

        A dropped connection gets one immediate reconnect and retry; a
        timeout does not (a slow Redis fails closed).

        Raises:
            CacheUnavailableException: Redis is down, slow, or returned an error.
        """
        bound = timeout or self.timeout
        if not await self._ensure_connected() or self.redis is None:
            raise CacheUnavailableException(operation)
        client = self.redis
        try:
            return await asyncio.wait_for(call(client), bound)
        except asyncio.TimeoutError as e:
            logger.warning("Cache %s timed out after %ss; cache disabled", operation, bound)
            await self._mark_unavailable(client)
            raise CacheUnavailableException(operation) from e
        except redis.ConnectionError as e:
            if await self._reconnect(broken=client) and self.redis is not None:
                retry_client = self.redis
                try:
                    return await asyncio.wait_for(call(retry_client), bound)
                except (redis.RedisError, asyncio.TimeoutError):
                    await self._mark_unavailable(retry_client)
            logger.warning("Cache %s unavailable (Redis disconnected)", operation)
            raise CacheUnavailableException(operation) from e
        except redis.RedisError as e:
            logger.exception("Cache %s error", operation)
            raise CacheUnavailableException(operation) from e

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable.

        Args:
            key: Cache key (use app.infrastructure.cache.keys builders).

        Returns:
            Cached value or None.
        """
        try:
            value = await self._execute("get", lambda r: r.get(key))
        except CacheUnavailableException:
            return None
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        try:
            return json.loads(value)
        except ValueError:
            logger.warning("Cache entry %s is not valid JSON; ignoring", key)
            return None

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success.

        Args:
            key: Cache key.
            value: Value to cache (JSON-serializable).
            ttl: Time-to-live in seconds (default 300).

        Returns:
            True if stored, False otherwise.
        """
        serialized = json.dumps(value)
        try:
            await self._execute("set", lambda r: r.setex(key, ttl, serialized))
        except CacheUnavailableException:
            return False
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete_prefix(self, prefix: str) -> int:
        """Delete all keys starting with prefix using SCAN + batched UNLINK (non-blocking).

        Uses scan_iter to avoid KEYS blocking; glob metacharacters in the
        prefix are escaped so it matches literally.

        Args:
            prefix: Literal key prefix (e.g. cache:/api/products).

        Returns:
            Number of keys deleted (0 when the cache is unavailable).
        """
        pattern = f"{escape_match_pattern(prefix)}*"

        async def _scan_and_unlink(r: redis.Redis) -> int:
            deleted = 0
            chunk: list[str] = []
            async for key in r.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= UNLINK_CHUNK_SIZE:
                    deleted += int(await r.unlink(*chunk) or 0)
                    chunk = []
            if chunk:
                deleted += int(await r.unlink(*chunk) or 0)
            return deleted

        try:
            deleted = await self._execute(
                "delete_prefix",
                _scan_and_unlink,
                timeout=self.timeout * INVALIDATION_TIMEOUT_FACTOR,
            )
        except CacheUnavailableException:
            return 0
        if deleted > 0:
            logger.info("Cache INVALIDATE: %s* (%s keys)", prefix, deleted)
        return deleted


async def _close_quietly(client: redis.Redis) -> None:
    """Close a client, ignoring errors from an already broken connection."""
    try:
        await client.aclose()
    except (redis.RedisError, OSError):
        logger.debug("Ignoring error while closing Redis client", exc_info=True)
