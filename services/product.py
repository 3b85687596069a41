import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_commit
from exceptions.product import ProductNotFoundException
from models.product import ProductDTO, ProductUpdateDTO
from repositories.product import ProductRepository

logger = logging.getLogger(__name__)

# Upper bound of the "cheap products" filter when the client sends none
DEFAULT_MAX_PRICE = 1000.0


class ProductService:

    @staticmethod
    async def create_product(product_dto: ProductDTO, session: AsyncSession | Session) -> ProductDTO:
        product_id = uuid.uuid4().hex
        await ProductRepository.create(product_id, product_dto, session)
        await session_commit(session)
        logger.info(f"[Products] Created product {product_id} ({product_dto.name}) in category '{product_dto.category}'")
        return await ProductRepository.get_by_id(product_id, session)

    @staticmethod
    async def get_by_id(product_id: str, session: AsyncSession | Session) -> ProductDTO:
        product = await ProductRepository.get_by_id(product_id, session)
        if product is None:
            raise ProductNotFoundException(product_id)
        return product

    @staticmethod
    async def get_all(session: AsyncSession | Session) -> list[ProductDTO]:
        """All products, newest first."""
        return await ProductRepository.get_all(session)

    @staticmethod
    async def get_by_category(category: str, session: AsyncSession | Session) -> list[ProductDTO]:
        return await ProductRepository.get_by_category(category, session)

    @staticmethod
    async def get_by_max_price(max_price: float | None, session: AsyncSession | Session) -> list[ProductDTO]:
        """Products priced at or below max_price; a missing or zero bound means DEFAULT_MAX_PRICE."""
        return await ProductRepository.get_by_price_range(0.0, max_price or DEFAULT_MAX_PRICE, session)

    @staticmethod
    async def get_by_price_range(
            min_price: float | None,
            max_price: float | None,
            session: AsyncSession | Session
    ) -> list[ProductDTO]:
        """
        Products with min_price <= price <= max_price.

        A missing lower bound is 0, a missing upper bound is unlimited.
        An inverted range matches nothing.
        """
        min_price = min_price or 0.0
        if max_price is not None and min_price > max_price:
            return []
        return await ProductRepository.get_by_price_range(min_price, max_price, session)

    @staticmethod
    async def update_product(
            product_id: str,
            update_dto: ProductUpdateDTO,
            session: AsyncSession | Session
    ) -> ProductDTO:
        """
        Apply a partial edit.

        Raises:
            ProductNotFoundException: no product with this id
        """
        values = update_dto.model_dump(exclude_none=True, exclude={"existing_images", "new_images"})
        images = update_dto.existing_images + update_dto.new_images
        if images:
            values["images"] = images
        product = await ProductRepository.update(product_id, values, session)
        if product is None:
            raise ProductNotFoundException(product_id)
        await session_commit(session)
        logger.info(f"[Products] Updated product {product_id}: {sorted(values)}")
        return product

    @staticmethod
    async def delete_product(product_id: str, session: AsyncSession | Session) -> ProductDTO:
        product = await ProductRepository.delete(product_id, session)
        if product is None:
            raise ProductNotFoundException(product_id)
        await session_commit(session)
        logger.info(f"[Products] Deleted product {product_id}")
        return product
