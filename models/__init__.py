"""
Models Package

This file ensures all SQLAlchemy models are imported and registered,
which is required for relationships to work correctly.
"""

from models.base import Base
from models.address import Address
from models.cart import CartLine
from models.order import Order, OrderItem
from models.product import Product
from models.user import User

__all__ = [
    'Base',
    'Address',
    'CartLine',
    'Order',
    'OrderItem',
    'Product',
    'User',
]
