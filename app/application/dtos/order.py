"""DTOs for orders and sales aggregates (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class OrderProductRef:
    """Product fields embedded in order reads."""

    name: str
    price: Decimal


@dataclass(frozen=True)
class OrderResult:
    """Order read-model."""

    id: str
    product_id: str
    university_id: str
    quantity: int
    amount: Decimal
    status: str
    order_date: datetime | None
    product: OrderProductRef | None = None


@dataclass(frozen=True)
class OrderCreate:
    """Validated input for creating an order."""

    product_id: str
    university_id: str
    quantity: int
    amount: Decimal
    status: str = "pending"
    order_date: datetime | None = None


@dataclass(frozen=True)
class UniversitySales:
    """One row of the top-universities ranking (SUM(amount) per university)."""

    university_id: str
    total_sales: Decimal
    order_count: int
    university_name: str
    university_location: str | None

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe row, shaped like the HTTP payload (cached as-is)."""
        return {
            "universityId": self.university_id,
            "totalSales": float(self.total_sales),
            "orderCount": self.order_count,
            "university": {
                "name": self.university_name,
                "location": self.university_location,
            },
        }
