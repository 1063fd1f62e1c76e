"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, repositories, the response
cache and application services. Routes depend only on these functions,
never on infrastructure directly.

Read endpoints use get_db (no commit); write endpoints use the
*_for_write variants backed by get_db_transactional. The cache and its
background writer live on app.state (set by the lifespan); when Redis is
disabled or the lifespan has not run they are None and services read
straight from the database.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import TokenClaims
from app.application.interfaces.services import ICacheService
from app.application.services import (
    AuthService,
    CacheInvalidator,
    CacheWriter,
    ListingService,
    OrderService,
    ProductService,
    SeedService,
    UniversityService,
)
from app.application.services.auth_service import decode_access_token
from app.core.config import get_settings
from app.domain.exceptions import AuthorizationException
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    OrderRepository,
    ProductRepository,
    UniversityRepository,
    UserRepository,
)
from app.infrastructure.security.jwt import TokenExpiredError

# ---- Repositories ----


async def get_product_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProductRepository:
    return ProductRepository(db)


async def get_product_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ProductRepository:
    return ProductRepository(db)


async def get_university_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UniversityRepository:
    return UniversityRepository(db)


async def get_university_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UniversityRepository:
    return UniversityRepository(db)


async def get_order_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderRepository:
    return OrderRepository(db)


async def get_order_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> OrderRepository:
    return OrderRepository(db)


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    return UserRepository(db)


async def get_user_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UserRepository:
    return UserRepository(db)


# ---- Cache ----


def get_cache(request: Request) -> ICacheService | None:
    """Response cache from app.state; None when Redis is disabled."""
    return getattr(request.app.state, "cache", None)


def get_cache_writer(request: Request) -> CacheWriter | None:
    return getattr(request.app.state, "cache_writer", None)


def get_cache_invalidator(
    cache: Annotated[ICacheService | None, Depends(get_cache)],
) -> CacheInvalidator:
    return CacheInvalidator(cache)


# ---- Services ----


def get_listing_service(
    product_repo: Annotated[ProductRepository, Depends(get_product_repo)],
    cache: Annotated[ICacheService | None, Depends(get_cache)],
    writer: Annotated[CacheWriter | None, Depends(get_cache_writer)],
) -> ListingService:
    return ListingService(
        product_repo,
        cache=cache,
        writer=writer,
        listing_ttl=get_settings().cache_ttl_listings,
    )


def _product_service(
    product_repo: ProductRepository,
    university_repo: UniversityRepository,
    listing_service: ListingService,
    invalidator: CacheInvalidator,
) -> ProductService:
    settings = get_settings()
    return ProductService(
        product_repo,
        university_repo,
        listing_service,
        invalidator,
        api_prefix=settings.api_prefix,
        categories_ttl=settings.cache_ttl_categories,
    )


def get_product_service(
    product_repo: Annotated[ProductRepository, Depends(get_product_repo)],
    university_repo: Annotated[UniversityRepository, Depends(get_university_repo)],
    listing_service: Annotated[ListingService, Depends(get_listing_service)],
    invalidator: Annotated[CacheInvalidator, Depends(get_cache_invalidator)],
) -> ProductService:
    """ProductService for read endpoints (listing, categories, detail)."""
    return _product_service(product_repo, university_repo, listing_service, invalidator)


def get_product_service_for_write(
    product_repo: Annotated[ProductRepository, Depends(get_product_repo_for_write)],
    university_repo: Annotated[UniversityRepository, Depends(get_university_repo)],
    listing_service: Annotated[ListingService, Depends(get_listing_service)],
    invalidator: Annotated[CacheInvalidator, Depends(get_cache_invalidator)],
) -> ProductService:
    """ProductService whose product writes run in a committed transaction."""
    return _product_service(product_repo, university_repo, listing_service, invalidator)


def get_university_service(
    university_repo: Annotated[UniversityRepository, Depends(get_university_repo)],
    invalidator: Annotated[CacheInvalidator, Depends(get_cache_invalidator)],
) -> UniversityService:
    return UniversityService(
        university_repo, invalidator, api_prefix=get_settings().api_prefix
    )


def get_university_service_for_write(
    university_repo: Annotated[
        UniversityRepository, Depends(get_university_repo_for_write)
    ],
    invalidator: Annotated[CacheInvalidator, Depends(get_cache_invalidator)],
) -> UniversityService:
    return UniversityService(
        university_repo, invalidator, api_prefix=get_settings().api_prefix
    )


def _order_service(
    order_repo: OrderRepository,
    product_repo: ProductRepository,
    university_repo: UniversityRepository,
    listing_service: ListingService,
    invalidator: CacheInvalidator,
) -> OrderService:
    settings = get_settings()
    return OrderService(
        order_repo,
        product_repo,
        university_repo,
        listing_service,
        invalidator,
        api_prefix=settings.api_prefix,
        top_universities_ttl=settings.cache_ttl_top_universities,
    )


def get_order_service(
    order_repo: Annotated[OrderRepository, Depends(get_order_repo)],
    product_repo: Annotated[ProductRepository, Depends(get_product_repo)],
    university_repo: Annotated[UniversityRepository, Depends(get_university_repo)],
    listing_service: Annotated[ListingService, Depends(get_listing_service)],
    invalidator: Annotated[CacheInvalidator, Depends(get_cache_invalidator)],
) -> OrderService:
    return _order_service(
        order_repo, product_repo, university_repo, listing_service, invalidator
    )


def get_order_service_for_write(
    order_repo: Annotated[OrderRepository, Depends(get_order_repo_for_write)],
    product_repo: Annotated[ProductRepository, Depends(get_product_repo)],
    university_repo: Annotated[UniversityRepository, Depends(get_university_repo)],
    listing_service: Annotated[ListingService, Depends(get_listing_service)],
    invalidator: Annotated[CacheInvalidator, Depends(get_cache_invalidator)],
) -> OrderService:
    return _order_service(
        order_repo, product_repo, university_repo, listing_service, invalidator
    )


def get_auth_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> AuthService:
    return AuthService(user_repo)


def get_auth_service_for_write(
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
) -> AuthService:
    return AuthService(user_repo)


async def get_seed_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    invalidator: Annotated[CacheInvalidator, Depends(get_cache_invalidator)],
) -> SeedService:
    """SeedService with every repository sharing one transaction."""
    return SeedService(
        UserRepository(db),
        UniversityRepository(db),
        ProductRepository(db),
        OrderRepository(db),
        invalidator,
        api_prefix=get_settings().api_prefix,
    )


# ---- Auth ----

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(_http_bearer)
    ],
) -> TokenClaims:
    """Return the caller's token claims.

    401 when the bearer token is missing or expired, 403 when it is invalid.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Access denied. No token provided.")
    try:
        return decode_access_token(credentials.credentials)
    except TokenExpiredError:
        raise HTTPException(status_code=401, detail="Token expired") from None
    except (ValueError, KeyError):
        raise HTTPException(status_code=403, detail="Invalid token") from None


def require_role(*roles: str):
    """Dependency factory: require JWT auth and one of the given roles."""

    async def _require(
        current_user: Annotated[TokenClaims, Depends(get_current_user)],
    ) -> TokenClaims:
        if current_user.role not in roles:
            raise AuthorizationException(role=current_user.role)
        return current_user

    return _require
