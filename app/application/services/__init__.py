"""Application services: listing cache, invalidation and entity use cases."""

from app.application.services.auth_service import AuthService
from app.application.services.cache_invalidation import CacheInvalidator
from app.application.services.cache_writer import CacheWriter
from app.application.services.listing_query import build_fetch_spec
from app.application.services.listing_service import ListingService
from app.application.services.order_service import OrderService
from app.application.services.product_service import ProductService
from app.application.services.seed_service import SeedResult, SeedService
from app.application.services.university_service import UniversityService

__all__ = [
    "AuthService",
    "CacheInvalidator",
    "CacheWriter",
    "ListingService",
    "OrderService",
    "ProductService",
    "SeedResult",
    "SeedService",
    "UniversityService",
    "build_fetch_spec",
]
