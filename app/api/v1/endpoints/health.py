"""Health check endpoint. No dependencies; used for liveness probes."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter

from app.schemas.health import HealthResponse

router = APIRouter()

_STARTED_AT = time.monotonic()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return healthy status, server time and process uptime in seconds."""
    return HealthResponse(
        timestamp=datetime.now(UTC),
        uptime=round(time.monotonic() - _STARTED_AT, 3),
    )
