"""
Unit Tests: OrderService / OrderRepository

Tests for services/order.py and repositories/order.py using an in-memory
SQLite database, covering:
- order creation, order numbers, checkout from the cart
- status updates and deletion
- dashboard statistics and monthly revenue
"""

import re
from datetime import datetime

import pytest
import pytest_asyncio

from enums.order_status import OrderStatus
from enums.payment_status import PaymentStatus
from exceptions.base import StorefrontException
from exceptions.order import (
    CheckoutNotAllowedException,
    EmptyCartException,
    InvalidOrderStatusException,
    MissingShippingAddressException,
    OrderNotFoundException,
)
from models.address import AddressDTO
from models.cart import CartLineDTO
from models.order import CustomerDTO, OrderDTO, OrderItemDTO
from models.session import UserSession
from repositories.order import OrderRepository
from services.cart_store import CartStore
from services.order import OrderService


@pytest.fixture
def address():
    return AddressDTO(
        id="a1", full_name="Nguyen Van A", phone_number="0912345678",
        province_code="01", province_name="Ha Noi",
        district_code="001", district_name="Ba Dinh",
        ward_code="00001", ward_name="Phuc Xa",
        street_address="12 Hang Bac", is_default=True
    )


@pytest.fixture
def make_order(address):
    def _make(total=100.0, status=OrderStatus.PENDING, payment_status=PaymentStatus.PENDING,
              created_at=None, order_number=None):
        return OrderDTO(
            order_number=order_number,
            customer=CustomerDTO(user_id="user-1", name="Nguyen Van A", email="a@example.com"),
            items=[OrderItemDTO(product_id="p1", name="Coffee beans", price=total, quantity=1)],
            total_amount=total,
            shipping_address=address,
            status=status,
            payment_method="cod",
            payment_status=payment_status,
            created_at=created_at
        )
    return _make


class TestCreate:

    def test_order_number_format(self):
        assert re.fullmatch(r"ORD-\d{6}-\d{4}", OrderService.generate_order_number())

    @pytest.mark.asyncio
    async def test_create_order_assigns_number(self, db_session, make_order, address):
        order = await OrderService.create_order(make_order(total=42.0), db_session)

        assert order.id is not None
        assert re.fullmatch(r"ORD-\d{6}-\d{4}", order.order_number)
        assert order.status == OrderStatus.PENDING
        assert order.shipping_address == address
        assert order.items[0].name == "Coffee beans"
        assert order.created_at is not None

    @pytest.mark.asyncio
    async def test_create_order_keeps_given_number(self, db_session, make_order):
        order = await OrderService.create_order(make_order(order_number="ORD-000001-0001"), db_session)
        assert order.order_number == "ORD-000001-0001"

    def test_order_needs_items(self, address):
        with pytest.raises(ValueError):
            OrderDTO(
                customer=CustomerDTO(name="A", email="a@example.com"),
                items=[],
                total_amount=0,
                shipping_address=address,
                payment_method="cod"
            )


class TestCheckout:

    @pytest.fixture
    def store(self, user_session):
        store = CartStore(user_session)
        store.add_item(CartLineDTO(product_id="p1", name="Coffee beans", unit_price=12.5, quantity=2,
                                   image_refs=["img-1"]))
        store.add_item(CartLineDTO(product_id="p2", name="Mug", unit_price=5.0))
        return store

    @pytest.mark.asyncio
    async def test_create_from_cart(self, store, address, db_session):
        order = await OrderService.create_from_cart(
            store, address, "cod", "a@example.com", db_session, shipping_cost=3.0, tax=1.5
        )

        assert order.total_amount == pytest.approx(30.0 + 3.0 + 1.5)
        assert [(item.product_id, item.quantity) for item in order.items] == [("p1", 2), ("p2", 1)]
        assert order.items[0].image == "img-1"
        assert order.customer.user_id == "user-1"
        assert order.customer.phone == "0912345678"
        assert store.is_empty()

    @pytest.mark.asyncio
    async def test_empty_cart(self, user_session, address, db_session):
        with pytest.raises(EmptyCartException):
            await OrderService.create_from_cart(CartStore(user_session), address, "cod", "a@example.com", db_session)

    @pytest.mark.asyncio
    async def test_missing_address_keeps_cart(self, store, db_session):
        with pytest.raises(MissingShippingAddressException):
            await OrderService.create_from_cart(store, None, "cod", "a@example.com", db_session)
        assert len(store) == 2

    @pytest.mark.asyncio
    async def test_requires_login(self, address, db_session):
        store = CartStore(UserSession())
        store.add_item(CartLineDTO(product_id="p1", name="Mug", unit_price=5.0))

        with pytest.raises(CheckoutNotAllowedException) as exc_info:
            await OrderService.create_from_cart(store, address, "cod", "a@example.com", db_session)

        assert isinstance(exc_info.value, StorefrontException)
        assert len(store) == 1
        assert await OrderRepository.get_all(0, 20, db_session) == []


class TestManage:

    @pytest.mark.asyncio
    async def test_update_status(self, db_session, make_order):
        order = await OrderService.create_order(make_order(), db_session)

        updated = await OrderService.update_status(order.id, "shipped", db_session)

        assert updated.status == OrderStatus.SHIPPED

    @pytest.mark.asyncio
    async def test_update_status_invalid(self, db_session, make_order):
        order = await OrderService.create_order(make_order(), db_session)

        with pytest.raises(InvalidOrderStatusException):
            await OrderService.update_status(order.id, "lost", db_session)

    @pytest.mark.asyncio
    async def test_update_status_unknown_order(self, db_session):
        with pytest.raises(OrderNotFoundException):
            await OrderService.update_status(999, "shipped", db_session)

    @pytest.mark.asyncio
    async def test_delete(self, db_session, make_order):
        order = await OrderService.create_order(make_order(), db_session)

        deleted = await OrderService.delete(order.id, db_session)

        assert deleted.order_number == order.order_number
        with pytest.raises(OrderNotFoundException):
            await OrderService.get_by_id(order.id, db_session)
        with pytest.raises(OrderNotFoundException):
            await OrderService.delete(order.id, db_session)

    @pytest.mark.asyncio
    async def test_get_all_newest_first_paginated(self, db_session, make_order):
        for day in range(1, 6):
            await OrderService.create_order(make_order(total=day, created_at=datetime(2024, 3, day)), db_session)

        first_page = await OrderService.get_all(0, db_session, page_size=2)
        third_page = await OrderService.get_all(2, db_session, page_size=2)

        assert [order.total_amount for order in first_page] == [5, 4]
        assert [order.total_amount for order in third_page] == [1]


class TestStats:

    @pytest_asyncio.fixture
    async def seeded(self, db_session, make_order):
        orders = [
            make_order(100.0, OrderStatus.DELIVERED, PaymentStatus.PAID, datetime(2024, 1, 10)),
            make_order(50.0, OrderStatus.SHIPPED, PaymentStatus.PAID, datetime(2024, 1, 20)),
            make_order(70.0, OrderStatus.CANCELLED, PaymentStatus.PAID, datetime(2024, 2, 1)),
            make_order(30.0, OrderStatus.PENDING, PaymentStatus.PENDING, datetime(2024, 2, 5)),
            make_order(25.0, OrderStatus.PROCESSING, PaymentStatus.PAID, datetime(2024, 3, 15)),
            make_order(10.0, OrderStatus.PENDING, PaymentStatus.FAILED, datetime(2024, 3, 16)),
            make_order(80.0, OrderStatus.DELIVERED, PaymentStatus.PAID, datetime(2023, 12, 31)),
        ]
        for order in orders:
            await OrderRepository.create(order, db_session)
        db_session.commit()

    @pytest.mark.asyncio
    async def test_order_stats(self, db_session, seeded):
        stats = await OrderService.get_order_stats(db_session)

        assert stats.total_orders == 7
        assert stats.status_counts == {
            "delivered": 2, "shipped": 1, "cancelled": 1, "pending": 2, "processing": 1
        }
        assert stats.total_revenue == pytest.approx(100 + 50 + 25 + 80)
        assert len(stats.recent_orders) == 5
        assert stats.recent_orders[0].created_at == datetime(2024, 3, 16)

    @pytest.mark.asyncio
    async def test_monthly_revenue(self, db_session, seeded):
        rows = await OrderService.get_monthly_revenue(db_session)

        assert [(row.month, row.year, row.revenue, row.orders) for row in rows] == [
            ("Dec", 2023, 80.0, 1),
            ("Jan", 2024, 150.0, 2),
            ("Mar", 2024, 25.0, 1),
        ]

    @pytest.mark.asyncio
    async def test_empty_database(self, db_session):
        stats = await OrderService.get_order_stats(db_session)

        assert stats.total_orders == 0
        assert stats.status_counts == {}
        assert stats.total_revenue == 0
        assert stats.recent_orders == []
        assert await OrderService.get_monthly_revenue(db_session) == []
