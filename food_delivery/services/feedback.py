"""Feedback Service: append, list and delete customer feedback."""

import logging
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.models import Feedback
from food_delivery.schemas import FeedbackCreate

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit(self, payload: FeedbackCreate) -> Feedback:
        feedback = Feedback(
            name=payload.name,
            email=payload.email,
            message=payload.message,
        )
        self.db.add(feedback)
        await self.db.commit()
        await self.db.refresh(feedback)

        logger.info(f"Feedback #{feedback.id} received from '{feedback.name}'")
        return feedback

    async def list_all(self) -> Sequence[Feedback]:
        result = await self.db.execute(select(Feedback).order_by(Feedback.id))
        return result.scalars().all()

    async def delete(self, feedback_id: int) -> bool:
        """Idempotent delete. Returns True if a row was removed."""
        result = await self.db.execute(delete(Feedback).where(Feedback.id == feedback_id))
        await self.db.commit()

        if result.rowcount:
            logger.info(f"Feedback #{feedback_id} deleted")
        return bool(result.rowcount)
