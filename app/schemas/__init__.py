"""Pydantic request/response schemas for the API (camelCase on the wire)."""

from app.schemas.auth import (
    AuthData,
    LoginRequest,
    ProfileOut,
    RefreshRequest,
    RegisterRequest,
    TokenPairOut,
    UserOut,
)
from app.schemas.common import (
    ApiResponse,
    CamelModel,
    CamelRequest,
    MessageResponse,
    PaginatedResponse,
    PaginationMeta,
)
from app.schemas.health import HealthResponse
from app.schemas.order import OrderCreateRequest, OrderOut, TopUniversityOut
from app.schemas.product import (
    CategoryOut,
    ProductCreateRequest,
    ProductOut,
    ProductUpdateRequest,
)
from app.schemas.seed import SeedResponse
from app.schemas.university import (
    UniversityCreateRequest,
    UniversityOut,
    UniversityUpdateRequest,
)

__all__ = [
    "ApiResponse",
    "AuthData",
    "CamelModel",
    "CamelRequest",
    "CategoryOut",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "OrderCreateRequest",
    "OrderOut",
    "PaginatedResponse",
    "PaginationMeta",
    "ProductCreateRequest",
    "ProductOut",
    "ProductUpdateRequest",
    "ProfileOut",
    "RefreshRequest",
    "RegisterRequest",
    "SeedResponse",
    "TokenPairOut",
    "TopUniversityOut",
    "UniversityCreateRequest",
    "UniversityOut",
    "UniversityUpdateRequest",
    "UserOut",
]
