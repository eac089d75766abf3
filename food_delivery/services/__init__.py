"""
                        Services Module

Business logic, one service per store. Each service wraps a
request-scoped AsyncSession and raises food_delivery.core.errors
exceptions for the routers to translate.

Services:
    - sessions: session token issue/resolve/revoke
    - identity: users, admins, logins
    - cart: per-user cart lines
    - orders: order lifecycle and shipped summary
    - feedback: customer feedback
"""

from food_delivery.services.cart import CartService
from food_delivery.services.feedback import FeedbackService
from food_delivery.services.identity import IdentityService
from food_delivery.services.orders import OrderService
from food_delivery.services.sessions import SessionContext, SessionService

__all__ = [
    "CartService",
    "FeedbackService",
    "IdentityService",
    "OrderService",
    "SessionContext",
    "SessionService",
]
