"""
User registration and login exceptions.
"""

from .base import StorefrontException


class UserException(StorefrontException):
    """Base exception for user-account errors."""
    pass


class UserNotFoundException(UserException):
    def __init__(self, user_id: str):
        super().__init__(
            f"User {user_id} not found",
            details={'user_id': user_id}
        )
        self.user_id = user_id


class UserAlreadyExistsException(UserException):
    """Raised when the e-mail or mobile number of a registration is already taken."""

    def __init__(self, field: str, value: str):
        super().__init__(
            f"A user with this {field} already exists",
            details={'field': field, 'value': value}
        )
        self.field = field
        self.value = value


class PasswordMismatchException(UserException):
    """Raised when password and confirmation of a registration differ."""

    def __init__(self, email: str):
        super().__init__(
            f"Password confirmation does not match for {email}",
            details={'email': email}
        )
        self.email = email


class InvalidCredentialsException(UserException):
    """Raised on login with an unknown e-mail or a wrong password."""

    def __init__(self, email: str):
        super().__init__(
            f"Invalid credentials for {email}",
            details={'email': email}
        )
        self.email = email
