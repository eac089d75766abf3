"""
Service Error Taxonomy

Every failure a handler can report to a caller is one of these exceptions.
Services raise them; the exception handlers registered in food_delivery.main
turn them into the JSON envelope {"code": ..., "message": ...}.
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert to the error envelope."""
        return {"code": self.code, "message": self.message}


class ValidationError(ServiceError):
    status_code = 422
    code = "validation_error"
    default_message = "Request is missing a required field"


class DuplicateUser(ServiceError):
    status_code = 409
    code = "duplicate_user"
    default_message = "A user with this name already exists"


class DuplicateOrder(ServiceError):
    status_code = 409
    code = "duplicate_order"
    default_message = "An order with this id already exists"


class InvalidCredentials(ServiceError):
    status_code = 401
    code = "invalid_credentials"
    default_message = "Invalid name or password"


class Unauthenticated(ServiceError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Login required"


class Forbidden(ServiceError):
    status_code = 403
    code = "forbidden"
    default_message = "Not allowed"


class NotFound(ServiceError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found"


class InvalidTransition(ServiceError):
    status_code = 409
    code = "invalid_transition"
    default_message = "Order status change not allowed"


class StoreUnavailable(ServiceError):
    status_code = 503
    code = "store_unavailable"
    default_message = "Database is unavailable"


__all__ = [
    "ServiceError",
    "ValidationError",
    "DuplicateUser",
    "DuplicateOrder",
    "InvalidCredentials",
    "Unauthenticated",
    "Forbidden",
    "NotFound",
    "InvalidTransition",
    "StoreUnavailable",
]
