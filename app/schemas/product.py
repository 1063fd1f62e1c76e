"""Product API schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from app.schemas.common import CamelModel, CamelRequest


class ProductCreateRequest(CamelRequest):
    """Request body for POST /api/products."""

    name: str = Field(..., min_length=2, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    category: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(default=0, ge=0)
    image_url: str | None = Field(default=None, max_length=500)
    university_id: UUID
    is_active: bool = True


class ProductUpdateRequest(CamelRequest):
    """Request body for PUT /api/products/{id}; only provided fields change."""

    name: str | None = Field(default=None, min_length=2, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    stock: int | None = Field(default=None, ge=0)
    image_url: str | None = Field(default=None, max_length=500)
    university_id: UUID | None = None
    is_active: bool | None = None


class UniversityRefOut(CamelModel):
    id: str
    name: str
    location: str | None = None


class ProductOut(CamelModel):
    """Product as returned by listings (university {id, name}) and detail reads (+ location)."""

    id: str
    name: str
    description: str | None = None
    category: str
    price: float
    stock: int
    image_url: str | None = None
    is_active: bool
    university_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    university: UniversityRefOut | None = None


class CategoryOut(CamelModel):
    category: str
