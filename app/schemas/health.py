"""Health check API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /api/health (liveness)."""

    status: str = Field(default="healthy", description="Service status")
    timestamp: datetime = Field(..., description="Server time (UTC)")
    uptime: float = Field(..., description="Seconds since the process started")
