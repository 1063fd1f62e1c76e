"""University API: active list, detail, and admin-only writes.

Delete deactivates the university; updates and deactivation clear the
product listing cache because listing items embed the university name.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_university_service,
    get_university_service_for_write,
    require_role,
)
from app.application.dtos.user import TokenClaims
from app.application.services import UniversityService
from app.core.limiter import limit_writes
from app.domain.enums import UserRole
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.university import (
    UniversityCreateRequest,
    UniversityOut,
    UniversityUpdateRequest,
)

router = APIRouter()

_require_admin = require_role(UserRole.ADMIN.value)


@router.get("", response_model=ApiResponse[list[UniversityOut]])
async def list_universities(
    university_svc: Annotated[UniversityService, Depends(get_university_service)],
):
    """Active universities ordered by name."""
    universities = await university_svc.list_active()
    return ApiResponse(data=[UniversityOut.model_validate(u) for u in universities])


@router.get("/{university_id}", response_model=ApiResponse[UniversityOut])
async def get_university(
    university_id: str,
    university_svc: Annotated[UniversityService, Depends(get_university_service)],
):
    university = await university_svc.get_university(university_id)
    return ApiResponse(data=UniversityOut.model_validate(university))


@router.post("", response_model=ApiResponse[UniversityOut], status_code=201)
@limit_writes
async def create_university(
    request: Request,
    body: UniversityCreateRequest,
    university_svc: Annotated[
        UniversityService, Depends(get_university_service_for_write)
    ],
    _: Annotated[TokenClaims, Depends(_require_admin)],
):
    university = await university_svc.create_university(
        name=body.name, location=body.location, contact_email=body.contact_email
    )
    return ApiResponse(data=UniversityOut.model_validate(university))


@router.put("/{university_id}", response_model=ApiResponse[UniversityOut])
@limit_writes
async def update_university(
    request: Request,
    university_id: str,
    body: UniversityUpdateRequest,
    university_svc: Annotated[
        UniversityService, Depends(get_university_service_for_write)
    ],
    _: Annotated[TokenClaims, Depends(_require_admin)],
):
    """Update the provided fields; name must stay unique (409)."""
    updates = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field != "name"
    }
    university = await university_svc.update_university(university_id, **updates)
    return ApiResponse(data=UniversityOut.model_validate(university))


@router.delete("/{university_id}", response_model=MessageResponse)
@limit_writes
async def delete_university(
    request: Request,
    university_id: str,
    university_svc: Annotated[
        UniversityService, Depends(get_university_service_for_write)
    ],
    _: Annotated[TokenClaims, Depends(_require_admin)],
):
    """Deactivate a university (its orders and products are kept)."""
    await university_svc.deactivate_university(university_id)
    return MessageResponse(message="University deleted successfully")
