"""
                Food Delivery Backend

Async REST backend for a food-delivery client: accounts, cookie
sessions, carts, orders and customer feedback.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
