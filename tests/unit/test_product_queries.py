"""SQL built for listings and sales rankings, compiled for PostgreSQL."""

from sqlalchemy.dialects import postgresql

from app.application.dtos.listing import ListingRequest
from app.application.services.listing_query import build_fetch_spec
from app.infrastructure.persistence.repositories.order_repo import (
    build_top_universities_statement,
)
from app.infrastructure.persistence.repositories.product_repo import (
    build_count_statement,
    build_page_statement,
    escape_like,
)


def _sql(statement) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


def _params(statement) -> dict:
    return statement.compile(dialect=postgresql.dialect()).params


def test_default_page_orders_newest_first_with_id_tiebreak() -> None:
    sql = _sql(build_page_statement(build_fetch_spec(ListingRequest())))
    assert "ORDER BY product.created_at DESC, product.id ASC" in sql
    assert "product.deleted_at IS NULL" in sql
    assert "product.is_active IS true" in sql
    assert "LIMIT" in sql and "OFFSET" in sql
    assert "ILIKE" not in sql


def test_window_matches_requested_page() -> None:
    spec = build_fetch_spec(ListingRequest.normalize(page="3", limit="20"))
    values = set(_params(build_page_statement(spec)).values())
    assert {20, 40} <= values


def test_search_and_category_filters() -> None:
    spec = build_fetch_spec(
        ListingRequest.normalize(search="50%_off", category="Apparel", sort_by="price", sort_order="asc")
    )
    statement = build_page_statement(spec)
    sql = _sql(statement)
    assert sql.count("ILIKE") == 2
    assert "product.category = " in sql
    assert "ORDER BY product.price ASC, product.id ASC" in sql
    assert "%50\\%\\_off%" in _params(statement).values()


def test_count_uses_same_filters_without_window() -> None:
    spec = build_fetch_spec(ListingRequest.normalize(search="hoodie", category="Apparel"))
    sql = _sql(build_count_statement(spec))
    assert "count(*)" in sql
    assert sql.count("ILIKE") == 2
    assert "product.category = " in sql
    assert "LIMIT" not in sql
    assert "ORDER BY" not in sql


def test_escape_like_escapes_wildcards_and_escape_char() -> None:
    assert escape_like("plain") == "plain"
    assert escape_like("100%") == "100\\%"
    assert escape_like("a_b") == "a\\_b"
    assert escape_like("c:\\tmp") == "c:\\\\tmp"


def test_top_universities_aggregates_and_ranks() -> None:
    statement = build_top_universities_statement(5)
    sql = _sql(statement)
    assert "sum(merch_order.amount) AS total_sales" in sql
    assert "count(merch_order.id) AS order_count" in sql
    assert "JOIN university ON university.id = merch_order.university_id" in sql
    assert "GROUP BY merch_order.university_id" in sql
    assert "ORDER BY total_sales DESC, merch_order.university_id ASC" in sql
    assert 5 in _params(statement).values()
