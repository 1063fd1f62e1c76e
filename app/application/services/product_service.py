"""Product application service: reads, writes and cache invalidation."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.listing import ListingRequest, ListingResult
from app.application.dtos.product import ProductCreate, ProductResult
from app.application.interfaces.repositories import (
    IProductRepository,
    IUniversityRepository,
)
from app.application.services.cache_invalidation import CacheInvalidator
from app.application.services.listing_service import ListingService
from app.core.constants import PRODUCT_CATEGORIES_ROUTE, PRODUCTS_ROUTE
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.cache.keys import response_key

logger = logging.getLogger(__name__)


class ProductService:
    """Product use cases over the repository, listing cache and invalidator.

    Each write is committed through the repository before the listing
    cache is invalidated, so a read after invalidation cannot re-cache
    the pre-write state.
    """

    def __init__(
        self,
        product_repo: IProductRepository,
        university_repo: IUniversityRepository,
        listing_service: ListingService,
        invalidator: CacheInvalidator,
        api_prefix: str = "/api",
        categories_ttl: int = 3600,
    ) -> None:
        self.product_repo = product_repo
        self.university_repo = university_repo
        self.listing_service = listing_service
        self.invalidator = invalidator
        self.products_route = f"{api_prefix}{PRODUCTS_ROUTE}"
        self.categories_route = f"{api_prefix}{PRODUCT_CATEGORIES_ROUTE}"
        self.categories_ttl = categories_ttl

    async def list_products(self, request: ListingRequest) -> ListingResult:
        return await self.listing_service.get_listing(self.products_route, request)

    async def get_categories(self) -> list[dict[str, str]]:
        """Distinct categories of active products as [{category}] (cached)."""

        async def _compute() -> list[dict[str, str]]:
            categories = await self.product_repo.get_categories()
            return [{"category": c} for c in categories]

        return await self.listing_service.get_or_compute(
            response_key(self.categories_route), self.categories_ttl, _compute
        )

    async def get_product(self, product_id: str) -> ProductResult:
        product = await self.product_repo.get_by_id(product_id)
        if product is None:
            raise ResourceNotFoundException("Product", product_id)
        return product

    async def create_product(self, data: ProductCreate) -> ProductResult:
        """Create a product for an existing university and invalidate listings.

        Raises:
            ResourceNotFoundException: University does not exist.
        """
        if await self.university_repo.get_by_id(data.university_id) is None:
            raise ResourceNotFoundException("University", data.university_id)
        product = await self.product_repo.create_product(data)
        logger.info("Product created: %s - %s", product.id, product.name)
        await self.product_repo.commit()
        await self.invalidator.invalidate(self.products_route)
        return product

    async def update_product(self, product_id: str, **updates: Any) -> ProductResult:
        """Apply the provided fields and invalidate listings.

        Raises:
            ValidationException: No fields were provided.
            ResourceNotFoundException: Product (or new university) does not exist.
        """
        if not updates:
            raise ValidationException("At least one field is required")
        university_id = updates.get("university_id")
        if university_id is not None and await self.university_repo.get_by_id(university_id) is None:
            raise ResourceNotFoundException("University", university_id)
        product = await self.product_repo.update_product(product_id, **updates)
        if product is None:
            raise ResourceNotFoundException("Product", product_id)
        logger.info("Product updated: %s", product_id)
        await self.product_repo.commit()
        await self.invalidator.invalidate(self.products_route)
        return product

    async def delete_product(self, product_id: str) -> None:
        """Soft-delete and invalidate listings. Raises ResourceNotFoundException."""
        if not await self.product_repo.delete_product(product_id):
            raise ResourceNotFoundException("Product", product_id)
        logger.info("Product soft-deleted: %s", product_id)
        await self.product_repo.commit()
        await self.invalidator.invalidate(self.products_route)
