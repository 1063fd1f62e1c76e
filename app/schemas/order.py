"""Order API schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from app.domain.enums import OrderStatus
from app.schemas.common import CamelModel, CamelRequest


class OrderCreateRequest(CamelRequest):
    """Request body for POST /api/orders."""

    product_id: UUID
    university_id: UUID
    quantity: int = Field(..., ge=1)
    amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    status: OrderStatus = OrderStatus.PENDING
    order_date: datetime | None = None


class OrderProductOut(CamelModel):
    name: str
    price: float


class OrderOut(CamelModel):
    id: str
    product_id: str
    university_id: str
    quantity: int
    amount: float
    status: str
    order_date: datetime | None = None
    product: OrderProductOut | None = None


class SalesUniversityOut(CamelModel):
    name: str
    location: str | None = None


class TopUniversityOut(CamelModel):
    """One row of GET /api/orders/top-universities."""

    university_id: str
    total_sales: float
    order_count: int
    university: SalesUniversityOut
