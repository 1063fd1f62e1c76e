"""Service interfaces (ports) for the application layer.

The cache store is an injected capability: the listing service, the
background cache writer and the invalidation trigger depend on this
protocol, never on a Redis client or module-level connection state.
"""

from __future__ import annotations

from typing import Any, Protocol


class ICacheService(Protocol):
    """Key-value cache with expiry and prefix deletion (DIP).

    Implementations never raise on connectivity problems: reads degrade to
    a miss, writes report False and deletions report 0.
    """

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds. Returns True on success."""

    async def delete_prefix(self, prefix: str) -> int:
        """Delete every key starting with prefix. Returns count deleted."""
