"""Order application service: sales ranking, per-university orders, order creation."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.order import OrderCreate, OrderResult
from app.application.interfaces.repositories import (
    IOrderRepository,
    IProductRepository,
    IUniversityRepository,
)
from app.application.services.cache_invalidation import CacheInvalidator
from app.application.services.listing_service import ListingService
from app.core.constants import (
    DEFAULT_TOP_UNIVERSITIES,
    MAX_TOP_UNIVERSITIES,
    ORDERS_ROUTE,
    TOP_UNIVERSITIES_ROUTE,
)
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.cache.keys import response_key

logger = logging.getLogger(__name__)


class OrderService:
    """Order use cases; the top-universities ranking is cached and cleared on new orders."""

    def __init__(
        self,
        order_repo: IOrderRepository,
        product_repo: IProductRepository,
        university_repo: IUniversityRepository,
        listing_service: ListingService,
        invalidator: CacheInvalidator,
        api_prefix: str = "/api",
        top_universities_ttl: int = 300,
    ) -> None:
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.university_repo = university_repo
        self.listing_service = listing_service
        self.invalidator = invalidator
        self.orders_route = f"{api_prefix}{ORDERS_ROUTE}"
        self.top_route = f"{api_prefix}{TOP_UNIVERSITIES_ROUTE}"
        self.top_universities_ttl = top_universities_ttl

    async def get_top_universities(
        self, top_n: int = DEFAULT_TOP_UNIVERSITIES
    ) -> list[dict[str, Any]]:
        """Universities ranked by total sales, highest first (cached).

        Raises:
            ValidationException: top_n outside [1, MAX_TOP_UNIVERSITIES].
        """
        if not 1 <= top_n <= MAX_TOP_UNIVERSITIES:
            raise ValidationException(
                f"top must be between 1 and {MAX_TOP_UNIVERSITIES}", field="top"
            )

        async def _compute() -> list[dict[str, Any]]:
            rows = await self.order_repo.get_top_universities_by_sales(top_n)
            return [row.to_dict() for row in rows]

        return await self.listing_service.get_or_compute(
            response_key(self.top_route, {"top": str(top_n)}),
            self.top_universities_ttl,
            _compute,
        )

    async def get_orders_by_university(self, university_id: str) -> list[OrderResult]:
        return await self.order_repo.get_by_university(university_id)

    async def create_order(self, data: OrderCreate) -> OrderResult:
        """Create an order for an existing product and university.

        Raises:
            ResourceNotFoundException: Product or university does not exist.
        """
        if await self.product_repo.get_by_id(data.product_id) is None:
            raise ResourceNotFoundException("Product", data.product_id)
        if await self.university_repo.get_by_id(data.university_id) is None:
            raise ResourceNotFoundException("University", data.university_id)
        order = await self.order_repo.create_order(data)
        logger.info("Order created: %s", order.id)
        await self.order_repo.commit()
        await self.invalidator.invalidate(self.orders_route)
        return order
