"""
Root of the storefront exception tree.
"""


class StorefrontException(Exception):
    """
    Failure raised by a cart, address, location or order operation.

    Views and the dashboard API catch this type at their boundary and turn it
    into a notice or an HTTP error; anything else is a programming error.

    Attributes:
        message: Text suitable for logs and the API error body
        details: Ids and values involved (user_id, order_id, parent_code, ...)
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        # Used by the API handler log line, so the ids end up next to the message
        if self.details:
            details_str = ', '.join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"
