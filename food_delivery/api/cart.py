"""Cart endpoints. Every route works on the session user's own cart."""

from fastapi import APIRouter, Depends, status

from food_delivery.api.deps import get_cart_service, require_user
from food_delivery.schemas import (
    CartItemCreate,
    CartItemDelete,
    CartItemResponse,
    ClearCartResponse,
    ErrorResponse,
    MessageResponse,
)
from food_delivery.services.cart import CartService
from food_delivery.services.sessions import SessionContext

router = APIRouter(
    tags=["Cart"],
    responses={401: {"model": ErrorResponse}},
)


@router.post(
    "/cart",
    response_model=CartItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add Cart Item",
)
async def add_cart_item(
    payload: CartItemCreate,
    session: SessionContext = Depends(require_user),
    cart: CartService = Depends(get_cart_service),
) -> CartItemResponse:
    item = await cart.add_item(payload, owner_id=session.subject_id)
    return CartItemResponse.model_validate(item)


@router.post(
    "/deleteitem",
    response_model=MessageResponse,
    summary="Remove Cart Item",
)
async def delete_cart_item(
    payload: CartItemDelete,
    session: SessionContext = Depends(require_user),
    cart: CartService = Depends(get_cart_service),
) -> MessageResponse:
    """Remove one item. Items that are already gone are not an error."""
    await cart.remove_item(payload.item_id, owner_id=session.subject_id)
    return MessageResponse(message="OK")


@router.get(
    "/mycart",
    response_model=list[CartItemResponse],
    summary="List Cart",
)
async def my_cart(
    session: SessionContext = Depends(require_user),
    cart: CartService = Depends(get_cart_service),
) -> list[CartItemResponse]:
    items = await cart.list_items(owner_id=session.subject_id)
    return [CartItemResponse.model_validate(i) for i in items]


@router.delete(
    "/deleteCart",
    response_model=ClearCartResponse,
    summary="Clear Cart",
)
async def clear_cart(
    session: SessionContext = Depends(require_user),
    cart: CartService = Depends(get_cart_service),
) -> ClearCartResponse:
    deleted = await cart.clear(owner_id=session.subject_id)
    return ClearCartResponse(message="Cart cleared", deleted_count=deleted)
