"""
In-memory shopping cart of the current session.

The store is the only owner of its cart lines: callers get copies, never the
stored objects. Every operation is total. Requests that cannot apply (adding a
product twice, lowering a quantity below 1, touching a product that is not in
the cart) leave the cart unchanged and report it through the returned
CartOutcome instead of raising.
"""

import logging

from enums.cart_outcome import CartOutcome
from models.cart import CartLineDTO
from models.session import UserSession

logger = logging.getLogger(__name__)


class CartStore:
    MIN_QUANTITY = 1

    def __init__(self, session: UserSession):
        self.session = session
        # dict keeps insertion order, which is the display order of the cart
        self._lines: dict[str, CartLineDTO] = {}
        session.on_logout(self.clear)

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: str) -> bool:
        return product_id in self._lines

    @property
    def lines(self) -> list[CartLineDTO]:
        return [line.model_copy(deep=True) for line in self._lines.values()]

    def get(self, product_id: str) -> CartLineDTO | None:
        line = self._lines.get(product_id)
        return line.model_copy(deep=True) if line is not None else None

    def is_empty(self) -> bool:
        return not self._lines

    def add_item(self, item: CartLineDTO) -> CartOutcome:
        """
        Add a new line for item.product_id.

        A product that is already in the cart is not merged: the call is a
        no-op and returns ALREADY_IN_CART so the view can show a notice.
        """
        if item.product_id in self._lines:
            logger.debug(f"[Cart] Product {item.product_id} already in cart, ignoring add")
            return CartOutcome.ALREADY_IN_CART
        self._lines[item.product_id] = item.model_copy(
            deep=True,
            update={"quantity": max(self.MIN_QUANTITY, item.quantity)}
        )
        return CartOutcome.ADDED

    def increase_quantity(self, product_id: str) -> CartOutcome:
        line = self._lines.get(product_id)
        if line is None:
            return CartOutcome.NOT_IN_CART
        line.quantity += 1
        return CartOutcome.INCREASED

    def decrease_quantity(self, product_id: str) -> CartOutcome:
        """Lower the quantity by one; never below 1 and never removes the line."""
        line = self._lines.get(product_id)
        if line is None:
            return CartOutcome.NOT_IN_CART
        if line.quantity - 1 < self.MIN_QUANTITY:
            return CartOutcome.MIN_QUANTITY_REACHED
        line.quantity -= 1
        return CartOutcome.DECREASED

    def remove_item(self, product_id: str) -> CartOutcome:
        if self._lines.pop(product_id, None) is None:
            return CartOutcome.NOT_IN_CART
        return CartOutcome.REMOVED

    def clear(self) -> CartOutcome:
        self._lines.clear()
        return CartOutcome.CLEARED

    def replace_all(self, lines: list[CartLineDTO]) -> None:
        """Load a persisted snapshot. Duplicate product ids keep the first line."""
        restored: dict[str, CartLineDTO] = {}
        for line in lines:
            if line.product_id not in restored:
                restored[line.product_id] = line.model_copy(
                    deep=True,
                    update={"quantity": max(self.MIN_QUANTITY, line.quantity)}
                )
        self._lines = restored

    def subtotal(self) -> float:
        # Recomputed on every call, nothing cached
        return sum(line.unit_price * line.quantity for line in self._lines.values())

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())
