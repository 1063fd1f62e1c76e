"""Seed API: populate an empty database with demo data (development only).

Disabled (404) unless SEED_ENABLED. Idempotent: a second call only
returns the demo credentials.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from app.api.v1.dependencies import get_seed_service
from app.application.services import SeedService
from app.application.services.seed_service import SEED_CREDENTIALS
from app.core.config import get_settings
from app.core.limiter import limit_writes
from app.schemas.seed import SeedCounts, SeedCredentials, SeedResponse

router = APIRouter()


def _require_seed_enabled() -> None:
    if not get_settings().seed_enabled:
        raise HTTPException(status_code=404, detail="Not found")


@router.post(
    "",
    response_model=SeedResponse,
    dependencies=[Depends(_require_seed_enabled)],
)
@limit_writes
async def seed_database(
    request: Request,
    seed_svc: Annotated[SeedService, Depends(get_seed_service)],
):
    """Create demo accounts, universities, products and orders."""
    result = await seed_svc.seed()
    credentials = SeedCredentials.model_validate(SEED_CREDENTIALS)
    if result.already_seeded:
        return SeedResponse(
            message="Data already seeded. Use the credentials below to login.",
            credentials=credentials,
        )
    return SeedResponse(
        message="Database seeded successfully",
        data=SeedCounts.model_validate(result.counts),
        credentials=credentials,
    )
