import calendar
import logging
import random
import time

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

import config
from db import session_commit
from enums.order_status import OrderStatus
from exceptions.order import (
    CheckoutNotAllowedException,
    EmptyCartException,
    InvalidOrderStatusException,
    MissingShippingAddressException,
    OrderNotFoundException,
)
from models.address import AddressDTO
from models.order import CustomerDTO, MonthlyRevenueDTO, OrderDTO, OrderItemDTO, OrderStatsDTO
from repositories.order import OrderRepository
from services.cart_store import CartStore

logger = logging.getLogger(__name__)


class OrderService:

    @staticmethod
    def generate_order_number() -> str:
        """
        Generate a human-readable order number.

        Format: ORD-<last 6 digits of the epoch milliseconds>-<4 random digits>

        Example:
            >>> OrderService.generate_order_number()
            'ORD-482913-0457'
        """
        millis = str(int(time.time() * 1000))[-6:]
        suffix = f"{random.randint(0, 9999):04d}"
        return f"ORD-{millis}-{suffix}"

    @staticmethod
    async def create_order(order_dto: OrderDTO, session: AsyncSession | Session) -> OrderDTO:
        if not order_dto.order_number:
            order_dto = order_dto.model_copy(update={"order_number": OrderService.generate_order_number()})
        order_id = await OrderRepository.create(order_dto, session)
        await session_commit(session)
        logger.info(f"[Orders] Created order {order_dto.order_number} (id={order_id}, total={order_dto.total_amount:.2f})")
        return await OrderRepository.get_by_id(order_id, session)

    @staticmethod
    async def create_from_cart(
            store: CartStore,
            address: AddressDTO | None,
            payment_method: str,
            email: str,
            session: AsyncSession | Session,
            shipping_cost: float = 0.0,
            tax: float = 0.0,
            notes: str | None = None
    ) -> OrderDTO:
        """
        Checkout: turn the session cart into an order.

        The cart is cleared only after the order was stored.

        Args:
            store: Cart of the logged-in user
            address: Shipping address, normally AddressBook.default_address
            payment_method: Payment method label recorded on the order
            email: Contact e-mail of the customer
            session: Database session

        Returns:
            The created order

        Raises:
            CheckoutNotAllowedException: no user is logged in
            EmptyCartException: cart has no lines
            MissingShippingAddressException: no address given
        """
        user = store.session
        if not user.is_authenticated:
            raise CheckoutNotAllowedException()
        if store.is_empty():
            raise EmptyCartException(user.user_id)
        if address is None:
            raise MissingShippingAddressException(user.user_id)

        items = [
            OrderItemDTO(
                product_id=line.product_id,
                name=line.name,
                price=line.unit_price,
                quantity=line.quantity,
                image=line.image_refs[0] if line.image_refs else None
            )
            for line in store.lines
        ]
        order_dto = OrderDTO(
            customer=CustomerDTO(
                user_id=user.user_id,
                name=address.full_name,
                email=email,
                phone=address.phone_number
            ),
            items=items,
            total_amount=store.subtotal() + shipping_cost + tax,
            shipping_address=address,
            shipping_cost=shipping_cost,
            tax=tax,
            payment_method=payment_method,
            notes=notes
        )
        created = await OrderService.create_order(order_dto, session)
        store.clear()
        return created

    @staticmethod
    async def get_all(page: int, session: AsyncSession | Session, page_size: int | None = None) -> list[OrderDTO]:
        return await OrderRepository.get_all(page, page_size or config.PAGE_ENTRIES, session)

    @staticmethod
    async def get_by_id(order_id: int, session: AsyncSession | Session) -> OrderDTO:
        order = await OrderRepository.get_by_id(order_id, session)
        if order is None:
            raise OrderNotFoundException(order_id)
        return order

    @staticmethod
    async def update_status(order_id: int, status: str, session: AsyncSession | Session) -> OrderDTO:
        """
        Raises:
            InvalidOrderStatusException: status is not an OrderStatus value
            OrderNotFoundException: no order with this id
        """
        try:
            new_status = OrderStatus(status)
        except ValueError as e:
            raise InvalidOrderStatusException(order_id, status) from e

        if not await OrderRepository.update_status(order_id, new_status, session):
            raise OrderNotFoundException(order_id)
        await session_commit(session)
        logger.info(f"[Orders] Order {order_id} status -> {new_status.value}")
        return await OrderService.get_by_id(order_id, session)

    @staticmethod
    async def delete(order_id: int, session: AsyncSession | Session) -> OrderDTO:
        order = await OrderRepository.delete(order_id, session)
        if order is None:
            raise OrderNotFoundException(order_id)
        await session_commit(session)
        logger.info(f"[Orders] Deleted order {order.order_number} (id={order_id})")
        return order

    @staticmethod
    async def get_order_stats(session: AsyncSession | Session) -> OrderStatsDTO:
        """
        Dashboard statistics.

        Revenue only counts orders that are paid and not cancelled.
        """
        return OrderStatsDTO(
            total_orders=await OrderRepository.count(session),
            status_counts=await OrderRepository.count_by_status(session),
            total_revenue=await OrderRepository.get_total_revenue(session),
            recent_orders=await OrderRepository.get_recent(config.RECENT_ORDERS_LIMIT, session)
        )

    @staticmethod
    async def get_monthly_revenue(session: AsyncSession | Session) -> list[MonthlyRevenueDTO]:
        rows = await OrderRepository.get_monthly_revenue(session)
        return [
            MonthlyRevenueDTO(month=calendar.month_abbr[month], year=year, revenue=revenue, orders=orders)
            for year, month, revenue, orders in rows
        ]
