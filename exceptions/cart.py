"""
Cart-related exceptions.
"""

from .base import StorefrontException


class CartException(StorefrontException):
    """Base exception for cart-related errors."""
    pass


class CartPersistenceException(CartException):
    """Raised when the cart snapshot cannot be written to or read from storage."""

    def __init__(self, user_id: str, reason: str):
        super().__init__(
            f"Failed to persist cart for user {user_id}: {reason}",
            details={'user_id': user_id, 'reason': reason}
        )
        self.user_id = user_id
        self.reason = reason
