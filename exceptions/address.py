"""
Address-related exceptions.
"""

from .base import StorefrontException


class AddressException(StorefrontException):
    """Base exception for address-related errors."""
    pass


class AddressNotFoundException(AddressException):
    """Raised when an address id is not part of the user's collection."""

    def __init__(self, address_id: str, user_id: str | None = None):
        super().__init__(
            f"Address {address_id} not found",
            details={'address_id': address_id, 'user_id': user_id}
        )
        self.address_id = address_id
        self.user_id = user_id


class AddressPersistenceException(AddressException):
    """Raised when the address collection cannot be read from or written to storage."""

    def __init__(self, user_id: str, reason: str):
        super().__init__(
            f"Failed to persist addresses for user {user_id}: {reason}",
            details={'user_id': user_id, 'reason': reason}
        )
        self.user_id = user_id
        self.reason = reason
