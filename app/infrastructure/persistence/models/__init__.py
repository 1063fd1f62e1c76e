"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.mixins import (
    EntityModel,
    SoftDeleteMixin,
    TimestampMixin,
    UuidMixin,
)
from app.infrastructure.persistence.models.order import Order
from app.infrastructure.persistence.models.product import Product
from app.infrastructure.persistence.models.university import University
from app.infrastructure.persistence.models.user import User

__all__ = [
    "EntityModel",
    "Order",
    "Product",
    "SoftDeleteMixin",
    "TimestampMixin",
    "University",
    "User",
    "UuidMixin",
]
