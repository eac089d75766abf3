"""
Session Service

Issues, resolves and revokes the opaque session tokens carried by the
session cookie. Every token is stored server-side with its subject, its
role claim and an expiry, so a token is only as good as its row.

Token lifecycle:
    absent -> issued -> revoked
                     -> expired (after session_ttl_minutes)
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.core.errors import Unauthenticated
from food_delivery.core.security import new_session_token
from food_delivery.models import Role, Session

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Naive UTC timestamp, the form sessions are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class SessionContext:
    """Identity resolved from a valid session token."""
    token: str
    subject_id: int
    subject_name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class SessionService:
    """
    Server-side session store.

    Args:
        db: Request-scoped database session
        ttl_seconds: Lifetime of newly issued sessions
    """

    def __init__(self, db: AsyncSession, ttl_seconds: int):
        self.db = db
        self.ttl_seconds = ttl_seconds

    async def issue(self, subject_id: int, subject_name: str, role: Role) -> Session:
        """Mint a token bound to the subject and persist it."""
        now = utcnow()
        # Expired rows are dropped as new ones arrive
        await self.db.execute(delete(Session).where(Session.expires_at <= now))
        record = Session(
            token=new_session_token(),
            subject_id=subject_id,
            subject_name=subject_name,
            role=role,
            expires_at=now + timedelta(seconds=self.ttl_seconds),
        )
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)

        logger.info(f"Session issued for {role.value} '{subject_name}'")
        return record

    async def resolve(self, token: Optional[str]) -> SessionContext:
        """
        Resolve a token into the identity it is bound to.

        Raises:
            Unauthenticated: Token missing, unknown, revoked or expired
        """
        if not token:
            raise Unauthenticated("Login required")

        record = await self.db.get(Session, token)
        if record is None:
            raise Unauthenticated("Unknown session")
        if record.revoked_at is not None:
            raise Unauthenticated("Session has been logged out")
        if record.expires_at <= utcnow():
            raise Unauthenticated("Session expired")

        return SessionContext(
            token=record.token,
            subject_id=record.subject_id,
            subject_name=record.subject_name,
            role=record.role,
        )

    async def revoke(self, token: Optional[str]) -> bool:
        """
        Mark a session as revoked.

        Idempotent: unknown or already revoked tokens are ignored.

        Returns:
            True if a live session was revoked by this call
        """
        if not token:
            return False

        record = await self.db.get(Session, token)
        if record is None or record.revoked_at is not None:
            return False

        record.revoked_at = utcnow()
        await self.db.commit()

        logger.info(f"Session revoked for {record.role.value} '{record.subject_name}'")
        return True

    async def purge_expired(self) -> int:
        """Delete sessions whose expiry has passed. Returns the number removed."""
        result = await self.db.execute(
            delete(Session).where(Session.expires_at <= utcnow())
        )
        await self.db.commit()

        purged = result.rowcount or 0
        if purged:
            logger.info(f"Purged {purged} expired sessions")
        return purged
