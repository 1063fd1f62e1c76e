"""Demo data: two accounts, five universities, ten products and eight orders."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

from app.application.dtos.order import OrderCreate
from app.application.dtos.product import ProductCreate
from app.application.interfaces.repositories import (
    IOrderRepository,
    IProductRepository,
    IUniversityRepository,
    IUserRepository,
)
from app.application.services.cache_invalidation import CacheInvalidator
from app.core.constants import ORDERS_ROUTE, PRODUCTS_ROUTE
from app.domain.enums import OrderStatus, UserRole

logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@test.com"
ADMIN_PASSWORD = "Admin@123"
USER_EMAIL = "user@test.com"
USER_PASSWORD = "User@123"

SEED_CREDENTIALS = {
    "admin": {"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    "user": {"email": USER_EMAIL, "password": USER_PASSWORD},
}

# (name, location, contact_email)
_UNIVERSITIES = [
    ("MIT", "Cambridge, MA", "merch@mit.edu"),
    ("Stanford University", "Stanford, CA", "store@stanford.edu"),
    ("Harvard University", "Cambridge, MA", "shop@harvard.edu"),
    ("Yale University", "New Haven, CT", "store@yale.edu"),
    ("Princeton University", "Princeton, NJ", "shop@princeton.edu"),
]

# (name, description, category, price, stock, university index)
_PRODUCTS = [
    ("MIT Premium Hoodie", "Premium cotton hoodie with embroidered MIT logo", "Apparel", "59.99", 100, 0),
    ("MIT Baseball Cap", "Classic fitted baseball cap", "Accessories", "24.99", 200, 0),
    ("Stanford T-Shirt", "Comfortable cotton t-shirt", "Apparel", "29.99", 150, 1),
    ("Stanford Notebook", "Premium leather notebook", "Stationery", "15.99", 300, 1),
    ("Harvard Sweatshirt", "Warm fleece sweatshirt", "Apparel", "54.99", 80, 2),
    ("Harvard Coffee Mug", "Ceramic mug with Harvard crest", "Accessories", "12.99", 500, 2),
    ("Yale Polo Shirt", "Smart casual polo", "Apparel", "44.99", 120, 3),
    ("Princeton Backpack", "Durable canvas backpack", "Accessories", "69.99", 60, 4),
    ("MIT Water Bottle", "Stainless steel insulated bottle", "Accessories", "19.99", 250, 0),
    ("Stanford Jacket", "Lightweight windbreaker jacket", "Apparel", "79.99", 40, 1),
]

# (product index, university index, quantity, amount, status, order date)
_ORDERS = [
    (0, 0, 5, "299.95", OrderStatus.DELIVERED, (2026, 1, 15)),
    (2, 1, 10, "299.90", OrderStatus.DELIVERED, (2026, 1, 20)),
    (4, 2, 3, "164.97", OrderStatus.SHIPPED, (2026, 2, 1)),
    (1, 0, 20, "499.80", OrderStatus.DELIVERED, (2026, 2, 5)),
    (5, 2, 15, "194.85", OrderStatus.CONFIRMED, (2026, 2, 10)),
    (7, 4, 8, "559.92", OrderStatus.DELIVERED, (2026, 1, 25)),
    (3, 1, 25, "399.75", OrderStatus.DELIVERED, (2026, 2, 8)),
    (9, 1, 6, "479.94", OrderStatus.PENDING, (2026, 2, 15)),
]


@dataclass(frozen=True)
class SeedResult:
    """Outcome of a seed run; counts are zero when data already existed."""

    already_seeded: bool
    counts: dict[str, int] = field(default_factory=dict)


class SeedService:
    """Populates an empty database with demo data (idempotent on the admin account)."""

    def __init__(
        self,
        user_repo: IUserRepository,
        university_repo: IUniversityRepository,
        product_repo: IProductRepository,
        order_repo: IOrderRepository,
        invalidator: CacheInvalidator,
        api_prefix: str = "/api",
    ) -> None:
        self.user_repo = user_repo
        self.university_repo = university_repo
        self.product_repo = product_repo
        self.order_repo = order_repo
        self.invalidator = invalidator
        self.api_prefix = api_prefix

    async def seed(self) -> SeedResult:
        if await self.user_repo.get_by_email(ADMIN_EMAIL) is not None:
            return SeedResult(already_seeded=True)

        await self.user_repo.create_user(
            username="admin", email=ADMIN_EMAIL, password=ADMIN_PASSWORD, role=UserRole.ADMIN.value
        )
        await self.user_repo.create_user(
            username="testuser", email=USER_EMAIL, password=USER_PASSWORD, role=UserRole.USER.value
        )

        universities = [
            await self.university_repo.create_university(
                name=name, location=location, contact_email=contact_email
            )
            for name, location, contact_email in _UNIVERSITIES
        ]
        products = [
            await self.product_repo.create_product(
                ProductCreate(
                    name=name,
                    description=description,
                    category=category,
                    price=Decimal(price),
                    stock=stock,
                    university_id=universities[uni].id,
                )
            )
            for name, description, category, price, stock, uni in _PRODUCTS
        ]
        for prod, uni, quantity, amount, status, (y, m, d) in _ORDERS:
            await self.order_repo.create_order(
                OrderCreate(
                    product_id=products[prod].id,
                    university_id=universities[uni].id,
                    quantity=quantity,
                    amount=Decimal(amount),
                    status=status.value,
                    order_date=datetime(y, m, d, tzinfo=UTC),
                )
            )

        await self.order_repo.commit()
        await self.invalidator.invalidate_many(
            f"{self.api_prefix}{PRODUCTS_ROUTE}", f"{self.api_prefix}{ORDERS_ROUTE}"
        )
        logger.info("Database seeded successfully")
        return SeedResult(
            already_seeded=False,
            counts={
                "users": 2,
                "universities": len(universities),
                "products": len(products),
                "orders": len(_ORDERS),
            },
        )
