"""
Tests for the exceptions package: every domain error is a StorefrontException
carrying its ids in `details`.
"""

import pytest

from exceptions import (
    AddressNotFoundException,
    CartPersistenceException,
    CheckoutNotAllowedException,
    InvalidCredentialsException,
    LocationFetchException,
    OrderException,
    OrderNotFoundException,
    ProductNotFoundException,
    StorefrontException,
    UserAlreadyExistsException,
)


class TestHierarchy:

    @pytest.mark.parametrize("exc", [
        CartPersistenceException("user-1", "disk full"),
        AddressNotFoundException("a1", "user-1"),
        LocationFetchException("district", "HTTP 503", "01"),
        ProductNotFoundException("p1"),
        UserAlreadyExistsException("email", "a@example.com"),
        InvalidCredentialsException("a@example.com"),
        OrderNotFoundException(7),
        CheckoutNotAllowedException(),
    ])
    def test_domain_errors_share_the_base(self, exc):
        assert isinstance(exc, StorefrontException)
        assert str(exc) == exc.message
        assert exc.details

    def test_checkout_not_allowed_is_an_order_error(self):
        exc = CheckoutNotAllowedException()

        assert isinstance(exc, OrderException)
        assert str(exc) == "Checkout not allowed: no user is logged in"


class TestRepr:

    def test_repr_lists_details(self):
        assert repr(OrderNotFoundException(7)) == "OrderNotFoundException('Order 7 not found', order_id=7)"

    def test_repr_without_details(self):
        assert repr(StorefrontException("boom")) == "StorefrontException('boom')"
