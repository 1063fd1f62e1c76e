"""DTOs for paginated listings: request, fetch specification and result.

ListingRequest is normalized and validated once at the HTTP boundary;
everything downstream (query builder, listing service, repositories)
trusts it. ListingResult round-trips through the cache as a plain dict.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from app.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_OFFSET, MAX_PAGE_SIZE
from app.domain.enums import SortDirection, SortField
from app.domain.exceptions import ValidationException


def _to_int(value: int | str | None, default: int, name: str) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationException(f"{name} must be an integer", field=name)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationException(f"{name} must be an integer", field=name) from None


def _clean_text(value: str | None) -> str | None:
    """Strip surrounding whitespace; empty means 'no filter'."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


@dataclass(frozen=True)
class ListingRequest:
    """Normalized listing parameters (page, page size, sort, filters)."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE
    sort_field: SortField = SortField.CREATED_AT
    sort_direction: SortDirection = SortDirection.DESC
    search: str | None = None
    category: str | None = None

    @classmethod
    def normalize(
        cls,
        *,
        page: int | str | None = None,
        limit: int | str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        search: str | None = None,
        category: str | None = None,
    ) -> ListingRequest:
        """Build a ListingRequest from raw query values, applying defaults.

        Raises:
            ValidationException: page < 1 or too large to seek to, limit
                outside [1, 100], or an unknown sortBy / sortOrder value.
        """
        page_n = _to_int(page, DEFAULT_PAGE, "page")
        if page_n < 1:
            raise ValidationException("Page must be positive integer", field="page")
        limit_n = _to_int(limit, DEFAULT_PAGE_SIZE, "limit")
        if not 1 <= limit_n <= MAX_PAGE_SIZE:
            raise ValidationException(f"Limit: 1-{MAX_PAGE_SIZE}", field="limit")
        if (page_n - 1) * limit_n > MAX_OFFSET:
            raise ValidationException("Page is out of range", field="page")

        try:
            sort_field = SortField(sort_by) if sort_by else SortField.CREATED_AT
        except ValueError:
            raise ValidationException(
                f"sortBy must be one of: {', '.join(f.value for f in SortField)}",
                field="sortBy",
            ) from None
        try:
            sort_direction = (
                SortDirection(sort_order.upper()) if sort_order else SortDirection.DESC
            )
        except ValueError:
            raise ValidationException(
                "sortOrder must be ASC or DESC", field="sortOrder"
            ) from None

        return cls(
            page=page_n,
            limit=limit_n,
            sort_field=sort_field,
            sort_direction=sort_direction,
            search=_clean_text(search),
            category=_clean_text(category),
        )

    def query_params(self) -> dict[str, str]:
        """Canonical query parameters (defaults filled, empty filters omitted)."""
        params = {
            "page": str(self.page),
            "limit": str(self.limit),
            "sortBy": self.sort_field.value,
            "sortOrder": self.sort_direction.value,
        }
        if self.search is not None:
            params["search"] = self.search
        if self.category is not None:
            params["category"] = self.category
        return params


@dataclass(frozen=True)
class FetchSpec:
    """Concrete filter / order / window for one page fetch from the data store."""

    search: str | None
    category: str | None
    order_field: SortField
    order_direction: SortDirection
    offset: int
    limit: int
    active_only: bool = True


@dataclass(frozen=True)
class ListingResult:
    """One page of records plus pagination metadata.

    items are JSON-safe record dicts so a cached page and a freshly
    fetched page are indistinguishable.
    """

    items: list[dict[str, Any]] = field(default_factory=list)
    total_count: int = 0
    current_page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the cache (JSON-compatible)."""
        return {
            "items": self.items,
            "total_count": self.total_count,
            "current_page": self.current_page,
            "page_size": self.page_size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ListingResult:
        """Rebuild from a cached dict produced by to_dict()."""
        return cls(
            items=list(data["items"]),
            total_count=int(data["total_count"]),
            current_page=int(data["current_page"]),
            page_size=int(data["page_size"]),
        )
