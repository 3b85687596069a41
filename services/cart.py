import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_commit, session_rollback
from enums.cart_outcome import CartOutcome
from enums.text_entity import TextEntity
from exceptions.cart import CartPersistenceException
from exceptions.product import ProductNotFoundException
from models.product import ProductDTO
from repositories.cart import CartRepository
from services.cart_store import CartStore
from services.product import ProductService
from utils.localizator import Localizator

logger = logging.getLogger(__name__)


class CartService:
    """
    Glue between the views and the in-memory CartStore.

    Methods return (success, message_key) tuples; the key is looked up in the
    user section of the localization file.
    """

    @staticmethod
    def add_product(store: CartStore, product: ProductDTO) -> tuple[bool, str]:
        """
        Add a product from the product-detail view.

        Returns:
            (True, "cart_item_added") or (False, key of the reason):
            login_required, product_out_of_stock, cart_item_already_added
        """
        if not store.session.is_authenticated:
            return False, "login_required"
        if not product.available:
            logger.debug(f"[Cart] Product {product.id} is out of stock")
            return False, "product_out_of_stock"
        outcome = store.add_item(product.to_cart_line())
        if outcome == CartOutcome.ADDED:
            logger.info(f"[Cart] User {store.session.user_id} added product {product.id}")
        return outcome.changed, outcome.value

    @staticmethod
    async def add_product_by_id(store: CartStore, product_id: str,
                                session: AsyncSession | Session) -> tuple[bool, str]:
        """Look the product up in the catalog, then add_product(). Unknown ids give product_not_found."""
        if not store.session.is_authenticated:
            return False, "login_required"
        try:
            product = await ProductService.get_by_id(product_id, session)
        except ProductNotFoundException as e:
            logger.warning(f"[Cart] {e}")
            return False, "product_not_found"
        return CartService.add_product(store, product)

    @staticmethod
    def apply(store: CartStore, action: str, product_id: str | None = None) -> tuple[bool, str]:
        """
        Run a cart-view action: increase, decrease, remove or clear.

        Raises:
            ValueError: unknown action
        """
        if action == "increase":
            outcome = store.increase_quantity(product_id)
        elif action == "decrease":
            outcome = store.decrease_quantity(product_id)
        elif action == "remove":
            outcome = store.remove_item(product_id)
        elif action == "clear":
            outcome = store.clear()
        else:
            raise ValueError(f"Unknown cart action: {action}")
        return outcome.changed, outcome.value

    @staticmethod
    async def _write(store: CartStore, session: AsyncSession | Session):
        user_id = store.session.user_id
        try:
            await CartRepository.replace_lines(user_id, store.lines, session)
            await session_commit(session)
        except SQLAlchemyError as e:
            await session_rollback(session)
            raise CartPersistenceException(user_id, str(e)) from e

    @staticmethod
    async def save(store: CartStore, session: AsyncSession | Session) -> tuple[bool, str]:
        """
        Persist the cart snapshot of the session user (last writer wins).

        A failed write leaves the in-memory cart as it is.
        """
        if not store.session.is_authenticated:
            return False, "login_required"
        try:
            await CartService._write(store, session)
        except CartPersistenceException as e:
            logger.error(f"[Cart] {e}")
            return False, "cart_save_failed"
        logger.debug(f"[Cart] Saved {len(store)} lines for user {store.session.user_id}")
        return True, "cart_saved"

    @staticmethod
    async def restore(store: CartStore, session: AsyncSession | Session) -> tuple[bool, str]:
        if not store.session.is_authenticated:
            return False, "login_required"
        try:
            lines = await CartRepository.get_lines(store.session.user_id, session)
        except SQLAlchemyError as e:
            logger.error(f"[Cart] Failed to load cart of user {store.session.user_id}: {e}")
            return False, "cart_load_failed"
        store.replace_all(lines)
        return True, "cart_restored"

    @staticmethod
    def get_cart_summary(store: CartStore, lang: str | None = None) -> str:
        """Plain-text cart listing with the subtotal, as shown above the checkout button."""
        if store.is_empty():
            return Localizator.get_text(TextEntity.USER, "cart_empty", lang=lang)
        rows = []
        for line in store.lines:
            price = Localizator.format_price(line.unit_price, lang)
            if line.is_discounted:
                price = f"{price} ({Localizator.format_price(line.previous_price, lang)})"
            rows.append(f"{line.name} x{line.quantity} @ {price} = {Localizator.format_price(line.line_total, lang)}")
        rows.append(Localizator.get_text(TextEntity.USER, "cart_subtotal", lang=lang).format(
            subtotal=Localizator.format_price(store.subtotal(), lang)
        ))
        return "\n".join(rows)
