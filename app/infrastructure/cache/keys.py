"""Cache key builders. Single place for key format (DRY).

Response keys look like ``cache:<route>?<query>`` where the query is the
normalized parameter set with keys sorted, so equivalent requests share
one entry. Routes are absolute request paths and must not contain "?".
"""

from collections.abc import Mapping
from urllib.parse import urlencode

from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_RESPONSE

# Characters with special meaning in a Redis MATCH pattern.
_GLOB_CHARS = frozenset("*?[]\\")


def _validate_route(route: str) -> None:
    """Raise ValueError if route cannot be used as a key component.

    Args:
        route: Absolute request path (e.g. /api/products).

    Raises:
        ValueError: If route is not absolute or carries a query string.
    """
    if not route.startswith("/"):
        raise ValueError(f"Cache route {route!r} must be an absolute path")
    if "?" in route:
        raise ValueError(f"Cache route {route!r} must not contain a query string")


def route_prefix(route: str) -> str:
    """Prefix shared by every cached response for route (used for invalidation)."""
    _validate_route(route)
    return f"{CACHE_PREFIX_RESPONSE}{CACHE_KEY_SEP}{route}"


def response_key(route: str, params: Mapping[str, str] | None = None) -> str:
    """Cache key for a response to route with the given normalized query params."""
    base = route_prefix(route)
    if not params:
        return base
    return f"{base}?{urlencode(sorted(params.items()))}"


def escape_match_pattern(literal: str) -> str:
    """Escape glob metacharacters so literal matches itself in SCAN MATCH."""
    return "".join(f"\\{ch}" if ch in _GLOB_CHARS else ch for ch in literal)
