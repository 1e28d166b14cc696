"""
Application error taxonomy

Services raise these; the handler registered in storefront.main renders
every StorefrontError as {"success": false, "message": ...} with its status code.
"""
from fastapi import status


class StorefrontError(Exception):
    """Base class for errors that map to an HTTP response"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """Missing or malformed request fields"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Please provide all required fields"


class NotFoundError(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InsufficientInventoryError(StorefrontError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Insufficient inventory"

    def __init__(self, product_name: str):
        self.product_name = product_name
        super().__init__(f"Insufficient inventory for {product_name}")


class ConflictError(StorefrontError):
    """Unique constraint violated (e.g. email already registered)"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class InvalidStatusTransitionError(StorefrontError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Invalid status transition"

    def __init__(self, field: str, current: str, requested: str):
        self.field = field
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change {field} from '{current}' to '{requested}'")


class StoreError(StorefrontError):
    """Persistence failure; the message shown to clients stays generic"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database error"
