"""
Cart Service

Per-user cart lines. Every add creates a new row; there is no quantity
merging. Removal is idempotent.
"""

import logging
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.models import CartItem
from food_delivery.schemas import CartItemCreate

logger = logging.getLogger(__name__)


class CartService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add_item(self, payload: CartItemCreate, owner_id: int) -> CartItem:
        item = CartItem(
            product_id=payload.product_id,
            name=payload.name,
            price=payload.price,
            image=payload.image,
            owner_id=owner_id,
        )
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)

        logger.info(f"Cart item #{item.id} '{item.name}' added for user #{owner_id}")
        return item

    async def remove_item(self, item_id: int, owner_id: int) -> bool:
        """
        Delete one of the owner's cart items.

        Returns:
            True if a row was deleted; absence is not an error
        """
        result = await self.db.execute(
            delete(CartItem).where(CartItem.id == item_id, CartItem.owner_id == owner_id)
        )
        await self.db.commit()
        return bool(result.rowcount)

    async def list_items(self, owner_id: int) -> Sequence[CartItem]:
        result = await self.db.execute(
            select(CartItem).where(CartItem.owner_id == owner_id).order_by(CartItem.id)
        )
        return result.scalars().all()

    async def clear(self, owner_id: int) -> int:
        """Delete every item in the owner's cart. Returns the number removed."""
        result = await self.db.execute(delete(CartItem).where(CartItem.owner_id == owner_id))
        await self.db.commit()

        deleted = result.rowcount or 0
        logger.info(f"Cart cleared for user #{owner_id} ({deleted} items)")
        return deleted
