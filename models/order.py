from datetime import datetime

from pydantic import BaseModel, Field
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, String, func, CheckConstraint, Enum as SQLEnum, Text
from sqlalchemy.orm import relationship

from enums.order_status import OrderStatus
from enums.payment_status import PaymentStatus
from models.address import AddressDTO
from models.base import Base


class Order(Base):
    __tablename__ = 'orders'

    id = Column(Integer, primary_key=True, unique=True)
    order_number = Column(String(32), nullable=False, unique=True)

    # Customer snapshot (user_id is empty for guest orders created by admins)
    user_id = Column(String, nullable=True, index=True)
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True)

    total_amount = Column(Float, nullable=False)
    shipping_cost = Column(Float, nullable=False, default=0.0)
    tax = Column(Float, nullable=False, default=0.0)

    # Shipping address snapshot (JSON-encoded AddressDTO) taken at checkout
    # so later edits of the address book do not change past orders
    shipping_address = Column(Text, nullable=False)

    status = Column(SQLEnum(OrderStatus), nullable=False, default=OrderStatus.PENDING)
    payment_method = Column(String, nullable=False)
    payment_status = Column(SQLEnum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    items = relationship('OrderItem', back_populates='order', cascade='all, delete-orphan', lazy='selectin')

    __table_args__ = (
        CheckConstraint('total_amount >= 0', name='check_order_total_amount_not_negative'),
    )


class OrderItem(Base):
    __tablename__ = 'order_items'

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    product_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False)
    image = Column(String, nullable=True)

    order = relationship('Order', back_populates='items')

    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_order_item_quantity_positive'),
    )


class OrderItemDTO(BaseModel):
    product_id: str
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    image: str | None = None


class CustomerDTO(BaseModel):
    user_id: str | None = None
    name: str
    email: str
    phone: str | None = None


class OrderDTO(BaseModel):
    id: int | None = None
    order_number: str | None = None
    customer: CustomerDTO
    items: list[OrderItemDTO] = Field(min_length=1)
    total_amount: float = Field(ge=0)
    shipping_address: AddressDTO
    shipping_cost: float = 0.0
    tax: float = 0.0
    status: OrderStatus = OrderStatus.PENDING
    payment_method: str
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderStatsDTO(BaseModel):
    total_orders: int
    status_counts: dict[str, int]
    total_revenue: float
    recent_orders: list[OrderDTO]


class MonthlyRevenueDTO(BaseModel):
    month: str  # short month name, e.g. "Jan"
    year: int
    revenue: float
    orders: int
