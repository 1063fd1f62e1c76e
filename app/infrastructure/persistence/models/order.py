"""Order ORM model."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.domain.enums import OrderStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import EntityModel
from app.infrastructure.persistence.models.product import Product
from app.infrastructure.persistence.models.university import University


class Order(EntityModel, Base):
    """Merchandise order placed with a university. Table: merch_order."""

    __tablename__ = "merch_order"

    product_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("product.id", ondelete="RESTRICT"), nullable=False
    )
    university_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("university.id", ondelete="RESTRICT"), nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=OrderStatus.PENDING.value,
        server_default=OrderStatus.PENDING.value,
    )
    order_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    product: Mapped[Product] = relationship(lazy="raise")
    university: Mapped[University] = relationship(lazy="raise")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_quantity_positive"),
        CheckConstraint("amount >= 0", name="ck_order_amount_non_negative"),
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'shipped', 'delivered', 'cancelled')",
            name="ck_order_status",
        ),
        Index("ix_merch_order_university_id", "university_id"),
        Index("ix_merch_order_order_date", "order_date"),
    )
