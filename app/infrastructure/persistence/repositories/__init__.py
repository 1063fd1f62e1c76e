"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.order_repo import OrderRepository
from app.infrastructure.persistence.repositories.product_repo import ProductRepository
from app.infrastructure.persistence.repositories.university_repo import (
    UniversityRepository,
)
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "OrderRepository",
    "ProductRepository",
    "UniversityRepository",
    "UserRepository",
]
