"""Order repository, including the top-universities-by-sales aggregate."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.application.dtos.order import (
    OrderCreate,
    OrderProductRef,
    OrderResult,
    UniversitySales,
)
from app.domain.exceptions import ConflictException
from app.infrastructure.persistence.models.order import Order
from app.infrastructure.persistence.models.university import University
from app.infrastructure.persistence.repositories.base import BaseRepository


def build_top_universities_statement(top_n: int) -> Select[tuple[str, Decimal, int, str, str | None]]:
    """SUM(amount) and COUNT(id) per university, highest total first, LIMIT top_n."""
    total_sales = func.sum(Order.amount).label("total_sales")
    order_count = func.count(Order.id).label("order_count")
    return (
        select(
            Order.university_id,
            total_sales,
            order_count,
            University.name,
            University.location,
        )
        .join(University, University.id == Order.university_id)
        .group_by(Order.university_id, University.name, University.location)
        .order_by(total_sales.desc(), Order.university_id.asc())
        .limit(top_n)
    )


def _order_to_result(o: Order, *, with_product: bool = False) -> OrderResult:
    product = None
    if with_product and o.product is not None:
        product = OrderProductRef(name=o.product.name, price=o.product.price)
    return OrderResult(
        id=o.id,
        product_id=o.product_id,
        university_id=o.university_id,
        quantity=o.quantity,
        amount=o.amount,
        status=o.status,
        order_date=o.order_date,
        product=product,
    )


class OrderRepository(BaseRepository[Order]):
    """Order repository. Orders are append-only here (no update/delete use case)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Order)

    async def get_top_universities_by_sales(self, top_n: int) -> list[UniversitySales]:
        result = await self._execute(
            build_top_universities_statement(top_n), "rank universities by sales"
        )
        return [
            UniversitySales(
                university_id=row.university_id,
                total_sales=Decimal(row.total_sales or 0),
                order_count=int(row.order_count),
                university_name=row.name,
                university_location=row.location,
            )
            for row in result.all()
        ]

    async def get_by_university(self, university_id: str) -> list[OrderResult]:
        result = await self._execute(
            select(Order)
            .options(joinedload(Order.product))
            .where(Order.university_id == university_id)
            .order_by(Order.order_date.desc(), Order.id.asc()),
            "list orders by university",
        )
        return [_order_to_result(o, with_product=True) for o in result.scalars().all()]

    async def create_order(self, data: OrderCreate) -> OrderResult:
        order = Order(
            product_id=data.product_id,
            university_id=data.university_id,
            quantity=data.quantity,
            amount=data.amount,
            status=data.status,
        )
        if data.order_date is not None:
            order.order_date = data.order_date
        try:
            created = await self.create(order)
        except IntegrityError as e:
            raise ConflictException("Order references a missing product or university") from e
        return _order_to_result(created)
