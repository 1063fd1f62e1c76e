"""Fire-and-forget cache writes.

Responses are returned before their cache entry is written. Each write
runs as a background task held in a set so it is not garbage-collected
mid-flight; the lifespan drains the set at shutdown.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from app.application.interfaces.services import ICacheService
from app.domain.exceptions import CacheUnavailableException

logger = logging.getLogger(__name__)


class CacheWriter:
    """Schedules cache writes off the request path and tracks them until done."""

    def __init__(self, cache: ICacheService) -> None:
        self.cache = cache
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        """Number of writes still in flight."""
        return len(self._tasks)

    def schedule(self, key: str, value: Any, ttl: int) -> None:
        """Start writing value under key; never raises and never blocks the caller."""
        task = asyncio.create_task(self._write(key, value, ttl))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _write(self, key: str, value: Any, ttl: int) -> None:
        try:
            stored = await self.cache.set(key, value, ttl)
        except CacheUnavailableException:
            stored = False
        except Exception:
            logger.exception("Background cache write failed for %s", key)
            return
        if not stored:
            logger.warning("Cache write skipped for %s (cache unavailable)", key)

    async def drain(self, timeout: float | None = None) -> None:
        """Wait for in-flight writes; cancel whatever is left after timeout."""
        if not self._tasks:
            return
        tasks = list(self._tasks)
        done, pending = await asyncio.wait(tasks, timeout=timeout)
        for task in pending:
            task.cancel()
        if pending:
            logger.warning("Cancelled %s pending cache writes at shutdown", len(pending))
        logger.debug("Drained %s cache writes", len(done))
