"""Product repository: paginated listing query, categories and CRUD. Returns application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, distinct, func, inspect as sa_inspect, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.application.dtos.listing import FetchSpec
from app.application.dtos.product import ProductCreate, ProductResult, UniversityRef
from app.domain.enums import SortDirection, SortField
from app.domain.exceptions import BackingStoreException, ConflictException
from app.infrastructure.persistence.models.product import Product
from app.infrastructure.persistence.repositories.base import BaseRepository

_SORT_COLUMNS = {
    SortField.NAME: Product.name,
    SortField.PRICE: Product.price,
    SortField.CREATED_AT: Product.created_at,
    SortField.CATEGORY: Product.category,
}

_UPDATABLE_FIELDS = frozenset({
    "name", "description", "category", "price", "stock", "image_url", "is_active", "university_id",
})

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def _listing_filters(spec: FetchSpec) -> list[Any]:
    conditions: list[Any] = [Product.deleted_at.is_(None)]
    if spec.active_only:
        conditions.append(Product.is_active.is_(True))
    if spec.search:
        pattern = f"%{escape_like(spec.search)}%"
        conditions.append(
            or_(
                Product.name.ilike(pattern, escape=LIKE_ESCAPE),
                Product.description.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    if spec.category:
        conditions.append(Product.category == spec.category)
    return conditions


def build_page_statement(spec: FetchSpec) -> Select[tuple[Product]]:
    """SELECT for one page: filters, requested order, id tie-break, OFFSET/LIMIT."""
    column = _SORT_COLUMNS[spec.order_field]
    ordering = column.asc() if spec.order_direction is SortDirection.ASC else column.desc()
    return (
        select(Product)
        .options(joinedload(Product.university))
        .where(*_listing_filters(spec))
        .order_by(ordering, Product.id.asc())
        .offset(spec.offset)
        .limit(spec.limit)
    )


def build_count_statement(spec: FetchSpec) -> Select[tuple[int]]:
    """COUNT(*) over the same predicate as build_page_statement (no window)."""
    return select(func.count()).select_from(Product).where(*_listing_filters(spec))


def _product_to_result(p: Product, *, with_location: bool = False) -> ProductResult:
    """Map ORM Product to ProductResult; embeds the university only when it was loaded."""
    university = None
    if "university" not in sa_inspect(p).unloaded and p.university is not None:
        university = UniversityRef(
            id=p.university.id,
            name=p.university.name,
            location=p.university.location if with_location else None,
        )
    return ProductResult(
        id=p.id,
        name=p.name,
        description=p.description,
        category=p.category,
        price=p.price,
        stock=p.stock,
        image_url=p.image_url,
        is_active=p.is_active,
        university_id=p.university_id,
        created_at=p.created_at,
        updated_at=p.updated_at,
        university=university,
    )


class ProductRepository(BaseRepository[Product]):
    """Product repository. fetch_page renders a FetchSpec; delete is a soft delete."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Product)

    async def fetch_page(self, spec: FetchSpec) -> tuple[list[ProductResult], int]:
        rows = await self._execute(build_page_statement(spec), "fetch products page")
        products = list(rows.scalars().unique().all())
        total = await self._execute(build_count_statement(spec), "count products")
        return [_product_to_result(p) for p in products], int(total.scalar_one())

    async def get_by_id(self, product_id: str) -> ProductResult | None:  # type: ignore[override]
        result = await self._execute(
            select(Product)
            .options(joinedload(Product.university))
            .where(Product.id == product_id, Product.deleted_at.is_(None)),
            "get product",
        )
        product = result.scalar_one_or_none()
        return _product_to_result(product, with_location=True) if product else None

    async def create_product(self, data: ProductCreate) -> ProductResult:
        product = Product(
            name=data.name,
            description=data.description,
            category=data.category,
            price=data.price,
            stock=data.stock,
            image_url=data.image_url,
            is_active=data.is_active,
            university_id=data.university_id,
        )
        try:
            created = await self.create(product)
        except IntegrityError as e:
            raise ConflictException("Product violates a data constraint") from e
        return _product_to_result(created)

    async def update_product(self, product_id: str, **updates: Any) -> ProductResult | None:
        unknown = set(updates) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update product fields: {', '.join(sorted(unknown))}")
        product = await super().get_by_id(product_id)
        if product is None:
            return None
        try:
            updated = await self.update_fields(product, updates)
        except IntegrityError as e:
            raise ConflictException("Product violates a data constraint") from e
        return _product_to_result(updated)

    async def delete_product(self, product_id: str) -> bool:
        product = await super().get_by_id(product_id)
        if product is None:
            return False
        try:
            await self.soft_delete(product)
        except IntegrityError as e:
            raise BackingStoreException("delete product", str(e)) from e
        return True

    async def get_categories(self) -> list[str]:
        result = await self._execute(
            select(distinct(Product.category))
            .where(Product.is_active.is_(True), Product.deleted_at.is_(None))
            .order_by(Product.category),
            "list product categories",
        )
        return list(result.scalars().all())
