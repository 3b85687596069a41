"""
Custom exceptions for the storefront.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application.

Exception Hierarchy:
--------------------
StorefrontException (base)
├── CartException
│   └── CartPersistenceException
├── AddressException
│   ├── AddressNotFoundException
│   └── AddressPersistenceException
├── LocationException
│   ├── LocationFetchException
│   └── LocationParseException
├── ProductException
│   └── ProductNotFoundException
├── UserException
│   ├── UserNotFoundException
│   ├── UserAlreadyExistsException
│   ├── PasswordMismatchException
│   └── InvalidCredentialsException
└── OrderException
    ├── OrderNotFoundException
    ├── InvalidOrderStatusException
    ├── EmptyCartException
    ├── MissingShippingAddressException
    └── CheckoutNotAllowedException

Usage:
------
Services raise specific exceptions:
    raise OrderNotFoundException(order_id=123)

Component boundaries catch them and turn them into UI-visible state:
    try:
        options = await client.fetch_districts(code)
    except LocationException as e:
        logger.warning(f"[Location] {e}")
        options = []
"""

from .base import StorefrontException
from .cart import CartException, CartPersistenceException
from .address import (
    AddressException,
    AddressNotFoundException,
    AddressPersistenceException
)
from .location import LocationException, LocationFetchException, LocationParseException
from .product import ProductException, ProductNotFoundException
from .user import (
    UserException,
    UserNotFoundException,
    UserAlreadyExistsException,
    PasswordMismatchException,
    InvalidCredentialsException
)
from .order import (
    OrderException,
    OrderNotFoundException,
    InvalidOrderStatusException,
    EmptyCartException,
    MissingShippingAddressException,
    CheckoutNotAllowedException
)

__all__ = [
    # Base
    'StorefrontException',

    # Cart
    'CartException',
    'CartPersistenceException',

    # Address
    'AddressException',
    'AddressNotFoundException',
    'AddressPersistenceException',

    # Location
    'LocationException',
    'LocationFetchException',
    'LocationParseException',

    # Product
    'ProductException',
    'ProductNotFoundException',

    # User
    'UserException',
    'UserNotFoundException',
    'UserAlreadyExistsException',
    'PasswordMismatchException',
    'InvalidCredentialsException',

    # Order
    'OrderException',
    'OrderNotFoundException',
    'InvalidOrderStatusException',
    'EmptyCartException',
    'MissingShippingAddressException',
    'CheckoutNotAllowedException',
]
