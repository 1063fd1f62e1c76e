"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import OrderStatus, SortDirection, SortField, UserRole
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BackingStoreException,
    CacheUnavailableException,
    ConflictException,
    MerchApiException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "AuthenticationException",
    "AuthorizationException",
    "BackingStoreException",
    "CacheUnavailableException",
    "ConflictException",
    "MerchApiException",
    "OrderStatus",
    "ResourceNotFoundException",
    "SortDirection",
    "SortField",
    "UserRole",
    "ValidationException",
]
