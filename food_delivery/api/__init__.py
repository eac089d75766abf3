"""
HTTP routers.

    - users: registration, logins, profile, user list, cookie clearing
    - cart: per-user cart lines
    - orders: order placement, status, listing, cancellation
    - feedback: customer feedback
"""

from food_delivery.api import cart, feedback, orders, users

routers = [users.router, cart.router, orders.router, feedback.router]

__all__ = ["routers"]
