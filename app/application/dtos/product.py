"""DTOs for products (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class UniversityRef:
    """University fields embedded in product reads (projection)."""

    id: str
    name: str
    location: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.location is not None:
            data["location"] = self.location
        return data


@dataclass(frozen=True)
class ProductResult:
    """Product read-model (result of fetch_page, get_by_id, create, update)."""

    id: str
    name: str
    description: str | None
    category: str
    price: Decimal
    stock: int
    image_url: str | None
    is_active: bool
    university_id: str
    created_at: datetime | None
    updated_at: datetime | None
    university: UniversityRef | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe record (price as float, timestamps ISO-8601)."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "price": float(self.price),
            "stock": self.stock,
            "image_url": self.image_url,
            "is_active": self.is_active,
            "university_id": self.university_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "university": self.university.to_dict() if self.university else None,
        }


@dataclass(frozen=True)
class ProductCreate:
    """Validated input for creating a product."""

    name: str
    category: str
    price: Decimal
    university_id: str
    description: str | None = None
    stock: int = 0
    image_url: str | None = None
    is_active: bool = True
