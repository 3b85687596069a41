"""
Tests for utils/localizator.py

Tests cover:
- Lang parameter and fallback to config.LANGUAGE
- All three sections (user, admin, common)
- Currency symbol and price formatting
- Every key used by the cart outcomes exists
"""

from unittest.mock import patch

import pytest

from enums.cart_outcome import CartOutcome
from enums.currency import Currency
from enums.text_entity import TextEntity
from utils.localizator import Localizator


class TestGetText:

    def test_user_entity(self):
        assert Localizator.get_text(TextEntity.USER, "cart_empty", lang="en") == "Your cart is empty."

    def test_admin_entity(self):
        assert Localizator.get_text(TextEntity.ADMIN, "order_not_found_error") == "Order not found."

    def test_common_entity(self):
        assert Localizator.get_text(TextEntity.COMMON, "usd_symbol") == "$"

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            Localizator.get_text(TextEntity.USER, "no_such_key")

    def test_unknown_language(self):
        with pytest.raises(FileNotFoundError):
            Localizator.get_text(TextEntity.USER, "cart_empty", lang="xx")

    @pytest.mark.parametrize("outcome", list(CartOutcome))
    def test_cart_outcome_keys_exist(self, outcome):
        assert Localizator.get_text(TextEntity.USER, outcome.value)


class TestPrices:

    def test_format_price_usd(self):
        assert Localizator.format_price(12.5) == "$12.50"

    @patch('config.CURRENCY', Currency.EUR)
    def test_format_price_eur(self):
        assert Localizator.format_price(3) == "€3.00"

    @patch('config.CURRENCY', Currency.VND)
    def test_currency_symbol_vnd(self):
        assert Localizator.get_currency_symbol() == "₫"
