"""
SQLAlchemy Database Models

One table per entity: users, admins, sessions, cart items, orders and
feedback. Tables are independent; cross references (owner_id,
ordered_by, subject_id) are plain ids.

Version: 1.0.0
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, Enum
from sqlalchemy.sql import func
from food_delivery.database import Base
import enum


class Role(str, enum.Enum):
    """Role claim carried by a session."""
    USER = "user"
    ADMIN = "admin"


class OrderStatus(str, enum.Enum):
    """Order status workflow."""
    PLACED = "placed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Allowed status changes; setting the current status again is a no-op
ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PLACED: frozenset({
        OrderStatus.PROCESSING,
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.PROCESSING: frozenset({
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    return new == current or new in ORDER_TRANSITIONS[current]


class User(Base):
    """Registered customer account."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(Role), default=Role.USER, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<User #{self.id} - {self.name}>"


class Admin(Base):
    """
    Admin identities, kept apart from customer accounts.

    Admins log in through /admin/login and receive sessions with the
    admin role claim.
    """
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Admin #{self.id} - {self.name}>"


class Session(Base):
    """
    Server-side record of an issued session token.

    expires_at and revoked_at are naive UTC timestamps.
    """
    __tablename__ = "sessions"

    token = Column(String(64), primary_key=True)
    subject_id = Column(Integer, nullable=False, index=True)
    subject_name = Column(String(100), nullable=False)
    role = Column(Enum(Role), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    expires_at = Column(DateTime, nullable=False)
    revoked_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<Session {self.role.value}:{self.subject_name}>"


class CartItem(Base):
    """A product placed in a user's cart. No quantity: one row per add."""
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    product_id = Column(String(100), nullable=False)
    name = Column(String(200), nullable=False)
    price = Column(Float, nullable=False)
    image = Column(String(500), nullable=True)
    owner_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<CartItem #{self.id} - {self.name} - owner {self.owner_id}>"


class Order(Base):
    """
    Checkout record.

    order_id is supplied by the client and unique. ordered_by is the id of
    the user whose session placed the order; it never changes. order_status is the
    only field updated after creation.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(String(100), nullable=False, unique=True, index=True)
    order_amount = Column(Float, nullable=False)
    user_name = Column(String(100), nullable=False)
    ordered_by = Column(Integer, nullable=False, index=True)
    order_status = Column(
        Enum(OrderStatus),
        default=OrderStatus.PLACED,
        nullable=False,
        index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Order {self.order_id} - {self.user_name} - {self.order_status.value}>"


class Feedback(Base):
    """Customer feedback message."""
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Feedback #{self.id} - {self.name}>"
