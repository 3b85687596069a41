# cart lines are the in-session shopping cart of one user. The cart lives in
# memory (services/cart_store.py); this table only holds the snapshot written by
# CartService.save so a cart can survive a restart.
#
# note that nothing is reserved in stock by being in a cart
from pydantic import BaseModel, Field
from sqlalchemy import Column, Integer, String, Float, Text, CheckConstraint, UniqueConstraint

from models.base import Base


class CartLine(Base):
    __tablename__ = "cart_lines"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    product_id = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)  # insertion order for display
    name = Column(String, nullable=False, default="")
    unit_price = Column(Float, nullable=False, default=0.0)
    previous_price = Column(Float, nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    image_refs = Column(Text, nullable=False, default="[]")  # JSON-encoded list of image ids

    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_cart_line_quantity_positive'),
        CheckConstraint('unit_price >= 0', name='check_cart_line_price_not_negative'),
        UniqueConstraint('user_id', 'product_id', name='uq_cart_line_user_product'),
    )


class CartLineDTO(BaseModel):
    product_id: str
    name: str = ""
    unit_price: float = Field(default=0.0, ge=0)
    previous_price: float | None = None  # shown struck through when discounted
    quantity: int = 1
    image_refs: list[str] = Field(default_factory=list)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity

    @property
    def is_discounted(self) -> bool:
        return self.previous_price is not None and self.previous_price > self.unit_price

