"""
Order Service

Order lifecycle: placement under a user session, admin status changes
along the OrderStatus transition table, owner/admin cancellation and the
shipped-orders aggregate used by the admin dashboard.

Status workflow:
    placed -> processing | shipped | delivered | cancelled
    processing -> shipped | delivered | cancelled
    shipped -> delivered
    delivered, cancelled: terminal
"""

import logging
from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.core.errors import DuplicateOrder, Forbidden, InvalidTransition, NotFound
from food_delivery.models import Order, OrderStatus, can_transition
from food_delivery.schemas import OrderCreate
from food_delivery.services.sessions import SessionContext

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def place_order(self, payload: OrderCreate, session: SessionContext) -> Order:
        """
        Persist a new order owned by the session's user.

        Raises:
            DuplicateOrder: If the client-supplied order id is already used
        """
        if await self._get(payload.order_id) is not None:
            raise DuplicateOrder(f"Order '{payload.order_id}' already exists")

        order = Order(
            order_id=payload.order_id,
            order_amount=payload.order_amount,
            user_name=payload.user_name,
            ordered_by=session.subject_id,
            order_status=OrderStatus.PLACED,
        )
        self.db.add(order)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateOrder(f"Order '{payload.order_id}' already exists")
        await self.db.refresh(order)

        logger.info(
            f"Order {order.order_id} placed by user #{order.ordered_by} "
            f"(amount {order.order_amount:.2f})"
        )
        return order

    async def update_status(self, order_id: str, new_status: OrderStatus) -> Order:
        """
        Move an order to a new status.

        Raises:
            NotFound: No order with this id
            InvalidTransition: The transition table forbids the change
        """
        order = await self._get(order_id)
        if order is None:
            raise NotFound(f"Order '{order_id}' not found")

        current = order.order_status
        if not can_transition(current, new_status):
            raise InvalidTransition(
                f"Cannot change order '{order_id}' from {current.value} to {new_status.value}"
            )

        if new_status != current:
            order.order_status = new_status
            await self.db.commit()
            await self.db.refresh(order)
            logger.info(f"Order {order_id}: {current.value} -> {new_status.value}")

        return order

    async def list_for_user(self, user_id: int) -> Sequence[Order]:
        result = await self.db.execute(
            select(Order).where(Order.ordered_by == user_id).order_by(Order.id)
        )
        return result.scalars().all()

    async def list_all(self) -> Sequence[Order]:
        result = await self.db.execute(select(Order).order_by(Order.id))
        return result.scalars().all()

    async def cancel(self, order_id: str, session: SessionContext) -> bool:
        """
        Delete an order. Only its owner or an admin may cancel it.

        Returns:
            True if an order was deleted; absence is not an error

        Raises:
            Forbidden: The order belongs to another user
        """
        order = await self._get(order_id)
        if order is None:
            return False

        if not session.is_admin and order.ordered_by != session.subject_id:
            raise Forbidden(f"Order '{order_id}' belongs to another user")

        await self.db.execute(delete(Order).where(Order.order_id == order_id))
        await self.db.commit()

        logger.info(f"Order {order_id} cancelled by {session.role.value} '{session.subject_name}'")
        return True

    async def shipped_summary(self) -> dict[str, float]:
        """Count and total amount of orders currently shipped."""
        result = await self.db.execute(
            select(func.count(Order.id), func.sum(Order.order_amount)).where(
                Order.order_status == OrderStatus.SHIPPED
            )
        )
        count, total = result.one()
        return {
            "count": count or 0,
            "total_amount": round(total or 0.0, 2),
        }

    async def _get(self, order_id: str) -> Order | None:
        result = await self.db.execute(select(Order).where(Order.order_id == order_id))
        return result.scalar_one_or_none()
