"""Product API: cached paginated listing, categories, detail and writes.

Listing query values arrive as raw strings and are normalized once by
ListingRequest.normalize (400 on out-of-range page/limit or unknown sort).
Every write invalidates the cached product listings.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    get_current_user,
    get_product_service,
    get_product_service_for_write,
    require_role,
)
from app.application.dtos.listing import ListingRequest, ListingResult
from app.application.dtos.product import ProductCreate, ProductResult
from app.application.dtos.user import TokenClaims
from app.application.services import ProductService
from app.core.limiter import limit_writes
from app.domain.enums import UserRole
from app.schemas.common import (
    ApiResponse,
    MessageResponse,
    PaginatedResponse,
    PaginationMeta,
)
from app.schemas.product import (
    CategoryOut,
    ProductCreateRequest,
    ProductOut,
    ProductUpdateRequest,
)

router = APIRouter()

# Fields a PUT may clear with an explicit null.
_NULLABLE_FIELDS = frozenset({"description", "image_url"})


def _paginated(result: ListingResult) -> PaginatedResponse[ProductOut]:
    return PaginatedResponse[ProductOut](
        data=[ProductOut.model_validate(item) for item in result.items],
        pagination=PaginationMeta(
            current_page=result.current_page,
            page_size=result.page_size,
            total_items=result.total_count,
            total_pages=result.total_pages,
            has_next=result.has_next,
            has_prev=result.has_prev,
        ),
    )


def _product_out(product: ProductResult) -> ProductOut:
    return ProductOut.model_validate(product.to_dict())


@router.get("", response_model=PaginatedResponse[ProductOut])
async def list_products(
    product_svc: Annotated[ProductService, Depends(get_product_service)],
    page: Annotated[str | None, Query(description="Page number (>= 1)")] = None,
    limit: Annotated[str | None, Query(description="Page size (1-100)")] = None,
    sort_by: Annotated[
        str | None, Query(alias="sortBy", description="name, price, createdAt or category")
    ] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder", description="ASC or DESC")] = None,
    search: Annotated[str | None, Query(description="Matches name or description")] = None,
    category: Annotated[str | None, Query(description="Exact category")] = None,
):
    """List active products, one page at a time (cached)."""
    listing = ListingRequest.normalize(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        category=category,
    )
    return _paginated(await product_svc.list_products(listing))


@router.get("/categories", response_model=ApiResponse[list[CategoryOut]])
async def list_categories(
    product_svc: Annotated[ProductService, Depends(get_product_service)],
):
    """Distinct categories of active products (cached)."""
    categories = await product_svc.get_categories()
    return ApiResponse(data=[CategoryOut.model_validate(c) for c in categories])


@router.get("/{product_id}", response_model=ApiResponse[ProductOut])
async def get_product(
    product_id: str,
    product_svc: Annotated[ProductService, Depends(get_product_service)],
):
    """Product detail including university {id, name, location}."""
    return ApiResponse(data=_product_out(await product_svc.get_product(product_id)))


@router.post("", response_model=ApiResponse[ProductOut], status_code=201)
@limit_writes
async def create_product(
    request: Request,
    body: ProductCreateRequest,
    product_svc: Annotated[ProductService, Depends(get_product_service_for_write)],
    _: Annotated[TokenClaims, Depends(get_current_user)],
):
    product = await product_svc.create_product(
        ProductCreate(
            name=body.name,
            description=body.description,
            category=body.category,
            price=body.price,
            stock=body.stock,
            image_url=body.image_url,
            university_id=str(body.university_id),
            is_active=body.is_active,
        )
    )
    return ApiResponse(data=_product_out(product), message="Product created successfully")


@router.put("/{product_id}", response_model=ApiResponse[ProductOut])
@limit_writes
async def update_product(
    request: Request,
    product_id: str,
    body: ProductUpdateRequest,
    product_svc: Annotated[ProductService, Depends(get_product_service_for_write)],
    _: Annotated[TokenClaims, Depends(get_current_user)],
):
    """Update only the provided fields; 400 if none are given."""
    updates = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field in _NULLABLE_FIELDS
    }
    if "university_id" in updates:
        updates["university_id"] = str(updates["university_id"])
    product = await product_svc.update_product(product_id, **updates)
    return ApiResponse(data=_product_out(product), message="Product updated successfully")


@router.delete("/{product_id}", response_model=MessageResponse)
@limit_writes
async def delete_product(
    request: Request,
    product_id: str,
    product_svc: Annotated[ProductService, Depends(get_product_service_for_write)],
    _: Annotated[TokenClaims, Depends(require_role(UserRole.ADMIN.value))],
):
    """Soft-delete a product (admin only)."""
    await product_svc.delete_product(product_id)
    return MessageResponse(message="Product deleted successfully")
