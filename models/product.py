# products are the catalog the storefront sells from. Admins manage them through
# the dashboard API, the product-detail view turns one into a cart line.
#
# stock_quantity is informational: adding to a cart does not reserve stock
from datetime import datetime

from pydantic import BaseModel, Field
from sqlalchemy import Column, String, Float, Integer, Boolean, Text, DateTime, func, CheckConstraint

from models.base import Base
from models.cart import CartLineDTO


class Product(Base):
    __tablename__ = "products"

    id = Column(String(32), primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False)
    old_price = Column(Float, nullable=True)
    images = Column(Text, nullable=False, default="[]")  # JSON-encoded list of image URLs
    category = Column(String, nullable=False, default="", index=True)
    stock_quantity = Column(Integer, nullable=False, default=0)
    in_stock = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint('price >= 0', name='check_product_price_not_negative'),
        CheckConstraint('stock_quantity >= 0', name='check_product_stock_not_negative'),
    )


class ProductDTO(BaseModel):
    """Product as shown on the product-detail view, the source of new cart lines."""
    id: str | None = None
    name: str
    description: str = ""
    price: float = Field(ge=0)
    old_price: float | None = None
    images: list[str] = Field(default_factory=list)
    category: str = ""
    in_stock: bool = True
    stock_quantity: int = 1
    is_featured: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def available(self) -> bool:
        return self.in_stock and self.stock_quantity > 0

    def to_cart_line(self) -> CartLineDTO:
        return CartLineDTO(
            product_id=self.id,
            name=self.name,
            unit_price=self.price,
            previous_price=self.old_price,
            quantity=1,
            image_refs=list(self.images)
        )


class ProductUpdateDTO(BaseModel):
    """
    Partial product edit from the dashboard form.

    Fields left as None keep their stored value. The image list becomes
    existing_images followed by new_images, and stays untouched when both are empty.
    """
    name: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    old_price: float | None = None
    category: str | None = None
    stock_quantity: int | None = Field(default=None, ge=0)
    in_stock: bool | None = None
    is_featured: bool | None = None
    existing_images: list[str] = Field(default_factory=list)
    new_images: list[str] = Field(default_factory=list)
