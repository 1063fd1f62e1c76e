"""Application DTOs (no ORM dependency)."""

from app.application.dtos.listing import FetchSpec, ListingRequest, ListingResult
from app.application.dtos.order import (
    OrderCreate,
    OrderProductRef,
    OrderResult,
    UniversitySales,
)
from app.application.dtos.product import ProductCreate, ProductResult, UniversityRef
from app.application.dtos.university import UniversityResult
from app.application.dtos.user import AuthResult, TokenClaims, TokenPair, UserResult

__all__ = [
    "AuthResult",
    "FetchSpec",
    "ListingRequest",
    "ListingResult",
    "OrderCreate",
    "OrderProductRef",
    "OrderResult",
    "ProductCreate",
    "ProductResult",
    "TokenClaims",
    "TokenPair",
    "UniversityRef",
    "UniversityResult",
    "UniversitySales",
    "UserResult",
]
