"""Order API: top universities by sales, orders per university, order creation."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    get_current_user,
    get_order_service,
    get_order_service_for_write,
)
from app.application.dtos.order import OrderCreate, OrderResult
from app.application.dtos.user import TokenClaims
from app.application.services import OrderService
from app.core.constants import DEFAULT_TOP_UNIVERSITIES, MAX_TOP_UNIVERSITIES
from app.core.limiter import limit_writes
from app.schemas.common import ApiResponse
from app.schemas.order import OrderCreateRequest, OrderOut, TopUniversityOut

router = APIRouter()


def _order_out(order: OrderResult) -> OrderOut:
    return OrderOut.model_validate(order)


@router.get("/top-universities", response_model=ApiResponse[list[TopUniversityOut]])
async def get_top_universities(
    order_svc: Annotated[OrderService, Depends(get_order_service)],
    top: Annotated[
        int,
        Query(ge=1, le=MAX_TOP_UNIVERSITIES, description="Number of universities to return"),
    ] = DEFAULT_TOP_UNIVERSITIES,
):
    """Universities ranked by total sales (SUM of order amounts), highest first."""
    rows = await order_svc.get_top_universities(top)
    return ApiResponse(data=[TopUniversityOut.model_validate(r) for r in rows])


@router.get("/university/{university_id}", response_model=ApiResponse[list[OrderOut]])
async def get_orders_by_university(
    university_id: str,
    order_svc: Annotated[OrderService, Depends(get_order_service)],
):
    """Orders of one university with product {name, price}, newest first."""
    orders = await order_svc.get_orders_by_university(university_id)
    return ApiResponse(data=[_order_out(o) for o in orders])


@router.post("", response_model=ApiResponse[OrderOut], status_code=201)
@limit_writes
async def create_order(
    request: Request,
    body: OrderCreateRequest,
    order_svc: Annotated[OrderService, Depends(get_order_service_for_write)],
    _: Annotated[TokenClaims, Depends(get_current_user)],
):
    order = await order_svc.create_order(
        OrderCreate(
            product_id=str(body.product_id),
            university_id=str(body.university_id),
            quantity=body.quantity,
            amount=body.amount,
            status=body.status.value,
            order_date=body.order_date,
        )
    )
    return ApiResponse(data=_order_out(order))
