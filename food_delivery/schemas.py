"""
Pydantic Schemas for Request/Response Validation

The web client speaks camelCase JSON (orderId, orderAmount, ...). Every
schema derives from CamelModel, so Python code uses snake_case attributes
while the wire format stays camelCase. Both spellings are accepted on input.

Version: 1.0.0
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime

from food_delivery.models import OrderStatus, Role


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class Credentials(CamelModel):
    """Login pair for users and admins."""
    name: str = Field(..., min_length=1, max_length=100, examples=["alice"])
    password: str = Field(..., min_length=1, max_length=128, examples=["pw1"])

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class UserCreate(Credentials):
    """Request schema for registering a new user."""
    email: Optional[str] = Field(None, max_length=255, examples=["alice@example.com"])


class CartItemCreate(CamelModel):
    """Product added to the cart. The client sends its catalogue id as `id`."""
    product_id: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("productId", "product_id", "id"),
        examples=["pizza-42"],
    )
    name: str = Field(..., min_length=1, max_length=200, examples=["Pizza Margherita"])
    price: float = Field(..., ge=0, allow_inf_nan=False, examples=[14.99])
    image: Optional[str] = Field(None, max_length=500)

    @field_validator("product_id", mode="before")
    @classmethod
    def coerce_product_id(cls, v):
        # Catalogue ids arrive as numbers from some clients
        if isinstance(v, int):
            return str(v)
        return v


class CartItemDelete(CamelModel):
    item_id: int = Field(..., examples=[1])


class OrderCreate(CamelModel):
    """Request schema for placing an order."""
    order_amount: float = Field(..., ge=0, allow_inf_nan=False, examples=[42])
    order_id: str = Field(..., min_length=1, max_length=100, examples=["X1"])
    user_name: str = Field(..., min_length=1, max_length=100, examples=["alice"])


class OrderStatusUpdate(CamelModel):
    order_status: OrderStatus = Field(..., examples=["shipped"])


class FeedbackCreate(CamelModel):
    """Request schema for customer feedback."""
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    message: str = Field(..., min_length=1, max_length=5000)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class UserResponse(CamelModel):
    """Public view of a user; never carries the password hash."""
    id: int
    name: str
    email: Optional[str] = None
    role: Role
    created_at: Optional[datetime] = None


class RegisterResponse(CamelModel):
    message: str
    user_id: int


class LoginResponse(CamelModel):
    message: str
    user_id: int
    name: str


class AdminLoginResponse(CamelModel):
    message: str
    name: str


class CartItemResponse(CamelModel):
    id: int
    product_id: str
    name: str
    price: float
    image: Optional[str] = None
    owner_id: int
    created_at: Optional[datetime] = None


class ClearCartResponse(CamelModel):
    message: str
    deleted_count: int


class OrderResponse(CamelModel):
    """Response schema for a single order."""
    order_id: str
    order_amount: float
    user_name: str
    ordered_by: int
    order_status: OrderStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ShippedSummaryResponse(CamelModel):
    """Aggregate over orders currently in the shipped state."""
    count: int
    total_amount: float


class FeedbackResponse(CamelModel):
    id: int
    name: str
    email: str
    message: str
    created_at: Optional[datetime] = None


class MessageResponse(CamelModel):
    message: str


class ErrorResponse(BaseModel):
    """Standard error envelope."""
    code: str
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    timestamp: datetime


__all__ = [
    "Credentials",
    "UserCreate",
    "CartItemCreate",
    "CartItemDelete",
    "OrderCreate",
    "OrderStatusUpdate",
    "FeedbackCreate",
    "UserResponse",
    "RegisterResponse",
    "LoginResponse",
    "AdminLoginResponse",
    "CartItemResponse",
    "ClearCartResponse",
    "OrderResponse",
    "ShippedSummaryResponse",
    "FeedbackResponse",
    "MessageResponse",
    "ErrorResponse",
    "HealthResponse",
]
