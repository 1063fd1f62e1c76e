"""Query builder: translate a normalized ListingRequest into a FetchSpec."""

from app.application.dtos.listing import FetchSpec, ListingRequest


def build_fetch_spec(request: ListingRequest) -> FetchSpec:
    """Pure translation; trusts that request was normalized at the boundary.

    Only active records are listed. Search and category are carried as-is
    (None means no filter); an unknown category simply yields no rows.
    """
    return FetchSpec(
        search=request.search,
        category=request.category,
        order_field=request.sort_field,
        order_direction=request.sort_direction,
        offset=(request.page - 1) * request.limit,
        limit=request.limit,
        active_only=True,
    )
