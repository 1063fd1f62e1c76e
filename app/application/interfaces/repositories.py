"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
Write methods return None when the target record does not exist; writes
are flushed, and commit() makes them durable (services commit before
invalidating cached reads).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.listing import FetchSpec
    from app.application.dtos.order import OrderCreate, OrderResult, UniversitySales
    from app.application.dtos.product import ProductCreate, ProductResult
    from app.application.dtos.university import UniversityResult
    from app.application.dtos.user import UserResult


class IProductRepository(Protocol):
    """Protocol for product repository (DIP)."""

    async def fetch_page(self, spec: FetchSpec) -> tuple[list[ProductResult], int]:
        """Return one page of products matching spec and the total match count."""

    async def get_by_id(self, product_id: str) -> ProductResult | None:
        """Return product (with university) by ID, or None."""

    async def create_product(self, data: ProductCreate) -> ProductResult:
        """Persist a new product."""

    async def update_product(
        self, product_id: str, **updates: Any
    ) -> ProductResult | None:
        """Apply provided fields; None if the product does not exist."""

    async def delete_product(self, product_id: str) -> bool:
        """Soft-delete; False if the product does not exist."""

    async def get_categories(self) -> list[str]:
        """Distinct categories of active products."""

    async def commit(self) -> None:
        """Commit pending writes; raises BackingStoreException on failure."""


class IUniversityRepository(Protocol):
    """Protocol for university repository (DIP)."""

    async def get_active(self) -> list[UniversityResult]:
        """Active universities ordered by name."""

    async def get_by_id(self, university_id: str) -> UniversityResult | None:
        """Return university by ID, or None."""

    async def create_university(
        self,
        name: str,
        location: str | None = None,
        contact_email: str | None = None,
    ) -> UniversityResult:
        """Persist a new university; raises ConflictException on duplicate name."""

    async def update_university(
        self, university_id: str, **updates: Any
    ) -> UniversityResult | None:
        """Apply provided fields; None if the university does not exist."""

    async def deactivate(self, university_id: str) -> UniversityResult | None:
        """Set is_active to False; None if the university does not exist."""

    async def commit(self) -> None:
        """Commit pending writes; raises BackingStoreException on failure."""


class IOrderRepository(Protocol):
    """Protocol for order repository (DIP)."""

    async def get_top_universities_by_sales(self, top_n: int) -> list[UniversitySales]:
        """Universities ranked by SUM(amount), highest first, at most top_n rows."""

    async def get_by_university(self, university_id: str) -> list[OrderResult]:
        """Orders for a university with product name/price, newest first."""

    async def create_order(self, data: OrderCreate) -> OrderResult:
        """Persist a new order."""

    async def commit(self) -> None:
        """Commit pending writes; raises BackingStoreException on failure."""


class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID, or None."""

    async def get_by_email(self, email: str) -> UserResult | None:
        """Return user by email, or None."""

    async def get_by_username(self, username: str) -> UserResult | None:
        """Return user by username, or None."""

    async def create_user(
        self, username: str, email: str, password: str, role: str = "user"
    ) -> UserResult:
        """Hash password and persist; raises ConflictException on duplicates."""

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        """Return active user when email/password match; else None."""

    async def commit(self) -> None:
        """Commit pending writes; raises BackingStoreException on failure."""
