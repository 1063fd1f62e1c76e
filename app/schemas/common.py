"""Shared API schemas: camelCase base model and the success envelopes."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Serializes snake_case fields as camelCase; accepts either on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CamelRequest(CamelModel):
    """Request body base: strips surrounding whitespace from strings."""

    model_config = ConfigDict(str_strip_whitespace=True)


class ApiResponse(CamelModel, Generic[T]):
    """Success envelope: {success, data, message?}."""

    success: bool = True
    data: T
    message: str | None = None


class MessageResponse(CamelModel):
    """Success envelope without data (e.g. deletes)."""

    success: bool = True
    message: str


class PaginationMeta(CamelModel):
    current_page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    has_next: bool
    has_prev: bool


class PaginatedResponse(CamelModel, Generic[T]):
    """Listing envelope: {success, data: [...], pagination: {...}}."""

    success: bool = True
    data: list[T]
    pagination: PaginationMeta
