"""Product ORM model (soft-deleted via deleted_at)."""

from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import EntityModel, SoftDeleteMixin
from app.infrastructure.persistence.models.university import University


class Product(EntityModel, SoftDeleteMixin, Base):
    """Product model. Table: product. Listed only while active and not deleted."""

    __tablename__ = "product"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
    university_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("university.id", ondelete="RESTRICT"), nullable=False
    )

    university: Mapped[University] = relationship(lazy="raise")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),
        Index("ix_product_category", "category"),
        Index("ix_product_university_id", "university_id"),
        Index("ix_product_created_at", "created_at"),
    )
