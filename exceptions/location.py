"""
Location-service exceptions.
"""

from .base import StorefrontException


class LocationException(StorefrontException):
    """Base exception for location-service errors."""
    pass


class LocationFetchException(LocationException):
    """Raised when the location service cannot be reached or answers with an error status."""

    def __init__(self, level: str, reason: str, parent_code: str | None = None):
        message = f"Failed to fetch {level} list"
        if parent_code:
            message += f" for parent {parent_code}"
        message += f": {reason}"
        super().__init__(
            message,
            details={'level': level, 'parent_code': parent_code, 'reason': reason}
        )
        self.level = level
        self.parent_code = parent_code
        self.reason = reason


class LocationParseException(LocationException):
    """Raised when a location-service response does not have the expected shape."""

    def __init__(self, level: str, reason: str):
        super().__init__(
            f"Malformed {level} response: {reason}",
            details={'level': level, 'reason': reason}
        )
        self.level = level
        self.reason = reason
