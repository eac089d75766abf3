"""
Shared FastAPI dependencies.

The session token travels only in the session cookie (SESSION_COOKIE_NAME,
default "uid"). require_session resolves it; require_user and require_admin add
the role claim checks used by the routers.
"""

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery.core.config import Settings
from food_delivery.core.errors import Forbidden
from food_delivery.database import get_db
from food_delivery.models import Role, Session
from food_delivery.services.cart import CartService
from food_delivery.services.feedback import FeedbackService
from food_delivery.services.identity import IdentityService
from food_delivery.services.orders import OrderService
from food_delivery.services.sessions import SessionContext, SessionService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> SessionService:
    return SessionService(db, ttl_seconds=settings.session_ttl_seconds)


def get_identity_service(
    db: AsyncSession = Depends(get_db),
    sessions: SessionService = Depends(get_session_service),
) -> IdentityService:
    return IdentityService(db, sessions)


def get_cart_service(db: AsyncSession = Depends(get_db)) -> CartService:
    return CartService(db)


def get_order_service(db: AsyncSession = Depends(get_db)) -> OrderService:
    return OrderService(db)


def get_feedback_service(db: AsyncSession = Depends(get_db)) -> FeedbackService:
    return FeedbackService(db)


# =============================================================================
# GATES
# =============================================================================

async def require_session(
    request: Request,
    sessions: SessionService = Depends(get_session_service),
    settings: Settings = Depends(get_app_settings),
) -> SessionContext:
    """Resolve the session cookie or fail with Unauthenticated."""
    token = request.cookies.get(settings.session_cookie_name)
    return await sessions.resolve(token)


async def require_user(
    session: SessionContext = Depends(require_session),
) -> SessionContext:
    """Session gate for routes acting on a customer's own data."""
    if session.role != Role.USER:
        raise Forbidden("Customer session required")
    return session


async def require_admin(
    session: SessionContext = Depends(require_session),
) -> SessionContext:
    """Session gate plus the admin role claim."""
    if not session.is_admin:
        raise Forbidden("Admin access required")
    return session


# =============================================================================
# COOKIES
# =============================================================================

def set_session_cookie(response: Response, session: Session, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        path="/",
    )


def clear_cookie(response: Response, name: str, settings: Settings) -> None:
    response.delete_cookie(
        key=name,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )
