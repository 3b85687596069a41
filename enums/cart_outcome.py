from enum import Enum


class CartOutcome(Enum):
    """
    Result of a cart operation.

    Values double as localization keys for the notice shown to the user.
    Operations that leave the cart untouched (ALREADY_IN_CART, NOT_IN_CART,
    MIN_QUANTITY_REACHED) are no-ops, not errors.
    """
    ADDED = "cart_item_added"
    ALREADY_IN_CART = "cart_item_already_added"
    INCREASED = "cart_quantity_increased"
    DECREASED = "cart_quantity_decreased"
    MIN_QUANTITY_REACHED = "cart_min_quantity_reached"
    REMOVED = "cart_item_removed"
    NOT_IN_CART = "cart_item_not_found"
    CLEARED = "cart_cleared"

    @property
    def changed(self) -> bool:
        return self not in (
            CartOutcome.ALREADY_IN_CART,
            CartOutcome.NOT_IN_CART,
            CartOutcome.MIN_QUANTITY_REACHED,
        )
