"""
Order-related exceptions.
"""

from .base import StorefrontException


class OrderException(StorefrontException):
    """Base exception for order-related errors."""
    pass


class OrderNotFoundException(OrderException):
    """Raised when order is not found in database."""

    def __init__(self, order_id: int):
        super().__init__(
            f"Order {order_id} not found",
            details={'order_id': order_id}
        )
        self.order_id = order_id


class InvalidOrderStatusException(OrderException):
    """Raised when an unknown order status is requested."""

    def __init__(self, order_id: int, status: str):
        super().__init__(
            f"Invalid status '{status}' for order {order_id}",
            details={'order_id': order_id, 'status': status}
        )
        self.order_id = order_id
        self.status = status


class EmptyCartException(OrderException):
    """Raised when trying to checkout with empty cart."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Cart is empty for user {user_id}",
            details={'user_id': user_id}
        )
        self.user_id = user_id


class MissingShippingAddressException(OrderException):
    """Raised when checkout needs a shipping address but none was given."""

    def __init__(self, user_id: str):
        super().__init__(
            f"No shipping address available for user {user_id}",
            details={'user_id': user_id}
        )
        self.user_id = user_id


class CheckoutNotAllowedException(OrderException):
    """Raised when checkout is attempted without a logged-in user."""

    def __init__(self, reason: str = "no user is logged in"):
        super().__init__(
            f"Checkout not allowed: {reason}",
            details={'reason': reason}
        )
        self.reason = reason
