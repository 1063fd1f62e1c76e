"""Request logging middleware.

Logs one line when a request arrives and one when its response starts
(method, path, status, duration). Query strings are not logged.
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming and background tasks.
"""

import logging
import time
from typing import Callable

logger = logging.getLogger("app.requests")


def RequestLoggingMiddleware(app: Callable, skip_paths: frozenset[str] = frozenset()) -> Callable:
    """Log request start and response status with elapsed milliseconds. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("path") in skip_paths:
            await app(scope, receive, send)
            return
        method = scope.get("method", "")
        path = scope.get("path", "")
        started = time.perf_counter()
        logger.info("→ %s %s", method, path)

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                elapsed_ms = (time.perf_counter() - started) * 1000
                status = message.get("status", 0)
                level = logging.WARNING if status >= 500 else logging.INFO
                logger.log(level, "← %s %s %s (%.1fms)", method, path, status, elapsed_ms)
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
