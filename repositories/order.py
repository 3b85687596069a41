from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush, session_delete
from enums.order_status import OrderStatus
from enums.payment_status import PaymentStatus
from models.address import AddressDTO
from models.order import Order, OrderItem, OrderDTO, OrderItemDTO, CustomerDTO


def _revenue_filter():
    # Revenue counts paid orders that were not cancelled afterwards
    return (Order.status != OrderStatus.CANCELLED, Order.payment_status == PaymentStatus.PAID)


class OrderRepository:
    @staticmethod
    def to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            order_number=order.order_number,
            customer=CustomerDTO(
                user_id=order.user_id,
                name=order.customer_name,
                email=order.customer_email,
                phone=order.customer_phone
            ),
            items=[OrderItemDTO.model_validate(item, from_attributes=True) for item in order.items],
            total_amount=order.total_amount,
            shipping_address=AddressDTO.model_validate_json(order.shipping_address),
            shipping_cost=order.shipping_cost,
            tax=order.tax,
            status=order.status,
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            notes=order.notes,
            created_at=order.created_at,
            updated_at=order.updated_at
        )

    @staticmethod
    async def create(order_dto: OrderDTO, session: AsyncSession | Session) -> int:
        order = Order(
            order_number=order_dto.order_number,
            user_id=order_dto.customer.user_id,
            customer_name=order_dto.customer.name,
            customer_email=order_dto.customer.email,
            customer_phone=order_dto.customer.phone,
            total_amount=order_dto.total_amount,
            shipping_cost=order_dto.shipping_cost,
            tax=order_dto.tax,
            shipping_address=order_dto.shipping_address.model_dump_json(),
            status=order_dto.status,
            payment_method=order_dto.payment_method,
            payment_status=order_dto.payment_status,
            notes=order_dto.notes,
            items=[OrderItem(**item.model_dump()) for item in order_dto.items]
        )
        if order_dto.created_at is not None:
            order.created_at = order_dto.created_at
        session.add(order)
        await session_flush(session)
        return order.id

    @staticmethod
    async def get_by_id(order_id: int, session: AsyncSession | Session) -> OrderDTO | None:
        stmt = select(Order).where(Order.id == order_id)
        result = await session_execute(stmt, session)
        order = result.scalar()
        if order is None:
            return None
        return OrderRepository.to_dto(order)

    @staticmethod
    async def get_all(page: int, page_size: int, session: AsyncSession | Session) -> list[OrderDTO]:
        stmt = (select(Order)
                .order_by(Order.created_at.desc(), Order.id.desc())
                .limit(page_size)
                .offset(page * page_size))
        result = await session_execute(stmt, session)
        return [OrderRepository.to_dto(order) for order in result.scalars().all()]

    @staticmethod
    async def get_recent(limit: int, session: AsyncSession | Session) -> list[OrderDTO]:
        return await OrderRepository.get_all(0, limit, session)

    @staticmethod
    async def update_status(order_id: int, status: OrderStatus, session: AsyncSession | Session) -> bool:
        stmt = update(Order).where(Order.id == order_id).values(status=status)
        result = await session_execute(stmt, session)
        return result.rowcount > 0

    @staticmethod
    async def delete(order_id: int, session: AsyncSession | Session) -> OrderDTO | None:
        stmt = select(Order).where(Order.id == order_id)
        result = await session_execute(stmt, session)
        order = result.scalar()
        if order is None:
            return None
        order_dto = OrderRepository.to_dto(order)
        await session_delete(order, session)
        await session_flush(session)
        return order_dto

    @staticmethod
    async def count(session: AsyncSession | Session) -> int:
        stmt = select(func.count(Order.id))
        result = await session_execute(stmt, session)
        return result.scalar_one()

    @staticmethod
    async def count_by_status(session: AsyncSession | Session) -> dict[str, int]:
        stmt = select(Order.status, func.count(Order.id).label('count')).group_by(Order.status)
        result = await session_execute(stmt, session)
        return {row.status.value: int(row.count) for row in result.all()}

    @staticmethod
    async def get_total_revenue(session: AsyncSession | Session) -> float:
        stmt = select(func.coalesce(func.sum(Order.total_amount), 0.0)).where(*_revenue_filter())
        result = await session_execute(stmt, session)
        return float(result.scalar_one())

    @staticmethod
    async def get_monthly_revenue(session: AsyncSession | Session) -> list[tuple[int, int, float, int]]:
        """
        Revenue of paid, non-cancelled orders grouped by calendar month.

        Returns:
            List of (year, month, revenue, order_count), oldest month first
        """
        year_col = func.strftime('%Y', Order.created_at)
        month_col = func.strftime('%m', Order.created_at)
        stmt = (
            select(
                year_col.label('year'),
                month_col.label('month'),
                func.sum(Order.total_amount).label('revenue'),
                func.count(Order.id).label('order_count')
            )
            .where(*_revenue_filter())
            .group_by(year_col, month_col)
            .order_by(year_col, month_col)
        )
        result = await session_execute(stmt, session)
        return [(int(row.year), int(row.month), float(row.revenue), int(row.order_count)) for row in result.all()]
