"""
Identity Service

Customer accounts and the separate admin identity set. Successful logins
are handed to the SessionService, which mints the session token.
"""

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.core.errors import DuplicateUser, InvalidCredentials, NotFound
from food_delivery.core.security import hash_password, verify_password
from food_delivery.models import Admin, Role, Session, User
from food_delivery.schemas import Credentials, UserCreate
from food_delivery.services.sessions import SessionService

logger = logging.getLogger(__name__)


class IdentityService:
    def __init__(self, db: AsyncSession, sessions: SessionService):
        self.db = db
        self.sessions = sessions

    # =========================================================================
    # USERS
    # =========================================================================

    async def register(self, payload: UserCreate) -> User:
        """
        Create a user account.

        Raises:
            DuplicateUser: If the name is already taken
        """
        existing = await self._user_by_name(payload.name)
        if existing is not None:
            raise DuplicateUser(f"User '{payload.name}' already exists")

        user = User(
            name=payload.name,
            email=payload.email,
            password_hash=hash_password(payload.password),
            role=Role.USER,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration of the same name
            await self.db.rollback()
            raise DuplicateUser(f"User '{payload.name}' already exists")
        await self.db.refresh(user)

        logger.info(f"User #{user.id} '{user.name}' registered")
        return user

    async def login(self, payload: Credentials) -> tuple[User, Session]:
        """
        Check a user's credentials and open a session.

        Raises:
            InvalidCredentials: Unknown name or wrong password
        """
        user = await self._user_by_name(payload.name)
        if user is None or not verify_password(user.password_hash, payload.password):
            logger.warning(f"Failed login for '{payload.name}'")
            raise InvalidCredentials()

        session = await self.sessions.issue(user.id, user.name, Role.USER)
        logger.info(f"User #{user.id} '{user.name}' logged in")
        return user, session

    async def fetch_profile(self, user_id: int) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFound(f"User #{user_id} not found")
        return user

    async def list_users(self) -> Sequence[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return result.scalars().all()

    async def _user_by_name(self, name: str) -> User | None:
        result = await self.db.execute(select(User).where(User.name == name))
        return result.scalar_one_or_none()

    # =========================================================================
    # ADMINS
    # =========================================================================

    async def admin_login(self, payload: Credentials) -> tuple[Admin, Session]:
        """
        Check credentials against the admin set and open an admin session.

        Raises:
            InvalidCredentials: Unknown admin or wrong password
        """
        result = await self.db.execute(select(Admin).where(Admin.name == payload.name))
        admin = result.scalar_one_or_none()
        if admin is None or not verify_password(admin.password_hash, payload.password):
            logger.warning(f"Failed admin login for '{payload.name}'")
            raise InvalidCredentials()

        session = await self.sessions.issue(admin.id, admin.name, Role.ADMIN)
        logger.info(f"Admin '{admin.name}' logged in")
        return admin, session

    async def seed_admin(self, name: str, password: str) -> bool:
        """
        Create the admin account if it does not exist yet.

        Returns:
            True if an admin was created
        """
        result = await self.db.execute(select(Admin).where(Admin.name == name))
        if result.scalar_one_or_none() is not None:
            return False

        self.db.add(Admin(name=name, password_hash=hash_password(password)))
        await self.db.commit()

        logger.info(f"Admin '{name}' created")
        return True
