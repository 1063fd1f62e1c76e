"""University API schemas."""

from datetime import datetime

from pydantic import EmailStr, Field

from app.schemas.common import CamelModel, CamelRequest


class UniversityCreateRequest(CamelRequest):
    name: str = Field(..., min_length=1, max_length=200)
    location: str | None = Field(default=None, max_length=200)
    contact_email: EmailStr | None = None


class UniversityUpdateRequest(CamelRequest):
    """Partial update; deactivation goes through DELETE."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    location: str | None = Field(default=None, max_length=200)
    contact_email: EmailStr | None = None


class UniversityOut(CamelModel):
    id: str
    name: str
    location: str | None = None
    contact_email: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
