"""
Order endpoints.

Placement and listing need a customer session. Cancellation needs the
owner's session or an admin session. Status updates, the full order list
and the shipped summary need an admin session.
"""

from fastapi import APIRouter, Depends, status

from food_delivery.api.deps import (
    get_order_service,
    require_admin,
    require_session,
    require_user,
)
from food_delivery.schemas import (
    ErrorResponse,
    MessageResponse,
    OrderCreate,
    OrderResponse,
    OrderStatusUpdate,
    ShippedSummaryResponse,
)
from food_delivery.services.orders import OrderService
from food_delivery.services.sessions import SessionContext

router = APIRouter(
    tags=["Orders"],
    responses={401: {"model": ErrorResponse}},
)


@router.post(
    "/orders",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Place Order",
)
async def place_order(
    payload: OrderCreate,
    session: SessionContext = Depends(require_user),
    orders: OrderService = Depends(get_order_service),
) -> OrderResponse:
    """Place an order owned by the logged-in user. New orders start as `placed`."""
    order = await orders.place_order(payload, session)
    return OrderResponse.model_validate(order)


@router.put(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update Order Status",
)
async def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    _: SessionContext = Depends(require_admin),
    orders: OrderService = Depends(get_order_service),
) -> OrderResponse:
    order = await orders.update_status(order_id, payload.order_status)
    return OrderResponse.model_validate(order)


@router.get(
    "/orders",
    response_model=list[OrderResponse],
    summary="My Orders",
)
async def my_orders(
    session: SessionContext = Depends(require_user),
    orders: OrderService = Depends(get_order_service),
) -> list[OrderResponse]:
    result = await orders.list_for_user(session.subject_id)
    return [OrderResponse.model_validate(o) for o in result]


@router.get(
    "/admin/orders",
    response_model=list[OrderResponse],
    responses={403: {"model": ErrorResponse}},
    tags=["Admin"],
    summary="All Orders",
)
async def all_orders(
    _: SessionContext = Depends(require_admin),
    orders: OrderService = Depends(get_order_service),
) -> list[OrderResponse]:
    result = await orders.list_all()
    return [OrderResponse.model_validate(o) for o in result]


@router.get(
    "/api/getTotalShippedOrders",
    response_model=ShippedSummaryResponse,
    responses={403: {"model": ErrorResponse}},
    tags=["Admin"],
    summary="Shipped Orders Summary",
)
async def shipped_orders_summary(
    _: SessionContext = Depends(require_admin),
    orders: OrderService = Depends(get_order_service),
) -> ShippedSummaryResponse:
    summary = await orders.shipped_summary()
    return ShippedSummaryResponse(**summary)


@router.delete(
    "/orders/{order_id}",
    response_model=MessageResponse,
    responses={403: {"model": ErrorResponse}},
    summary="Cancel Order",
)
async def cancel_order(
    order_id: str,
    session: SessionContext = Depends(require_session),
    orders: OrderService = Depends(get_order_service),
) -> MessageResponse:
    """Cancel (delete) an order. Cancelling a missing order succeeds."""
    await orders.cancel(order_id, session)
    return MessageResponse(message="Order cancelled successfully")
