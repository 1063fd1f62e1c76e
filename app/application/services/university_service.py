"""University application service."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.university import UniversityResult
from app.application.interfaces.repositories import IUniversityRepository
from app.application.services.cache_invalidation import CacheInvalidator
from app.core.constants import ORDERS_ROUTE, PRODUCTS_ROUTE
from app.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)


class UniversityService:
    """University CRUD.

    Writes invalidate product listings (they embed the university) and the
    order routes (the top-universities ranking carries name and location).
    """

    def __init__(
        self,
        university_repo: IUniversityRepository,
        invalidator: CacheInvalidator,
        api_prefix: str = "/api",
    ) -> None:
        self.university_repo = university_repo
        self.invalidator = invalidator
        self.products_route = f"{api_prefix}{PRODUCTS_ROUTE}"
        self.orders_route = f"{api_prefix}{ORDERS_ROUTE}"

    async def list_active(self) -> list[UniversityResult]:
        return await self.university_repo.get_active()

    async def get_university(self, university_id: str) -> UniversityResult:
        university = await self.university_repo.get_by_id(university_id)
        if university is None:
            raise ResourceNotFoundException("University", university_id)
        return university

    async def create_university(
        self,
        name: str,
        location: str | None = None,
        contact_email: str | None = None,
    ) -> UniversityResult:
        university = await self.university_repo.create_university(
            name=name, location=location, contact_email=contact_email
        )
        await self.university_repo.commit()
        logger.info("University created: %s - %s", university.id, university.name)
        return university

    async def update_university(self, university_id: str, **updates: Any) -> UniversityResult:
        if not updates:
            raise ValidationException("At least one field is required")
        university = await self.university_repo.update_university(university_id, **updates)
        if university is None:
            raise ResourceNotFoundException("University", university_id)
        logger.info("University updated: %s", university_id)
        await self.university_repo.commit()
        await self.invalidator.invalidate_many(self.products_route, self.orders_route)
        return university

    async def deactivate_university(self, university_id: str) -> UniversityResult:
        """Mark the university inactive (delete keeps the row for order history)."""
        university = await self.university_repo.deactivate(university_id)
        if university is None:
            raise ResourceNotFoundException("University", university_id)
        logger.info("University deactivated: %s", university_id)
        await self.university_repo.commit()
        await self.invalidator.invalidate_many(self.products_route, self.orders_route)
        return university
