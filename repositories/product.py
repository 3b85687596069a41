import json

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush, session_delete
from models.product import Product, ProductDTO


class ProductRepository:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description or "",
            price=product.price,
            old_price=product.old_price,
            images=json.loads(product.images or "[]"),
            category=product.category or "",
            in_stock=product.in_stock,
            stock_quantity=product.stock_quantity,
            is_featured=product.is_featured,
            created_at=product.created_at,
            updated_at=product.updated_at
        )

    @staticmethod
    async def _get(product_id: str, session: AsyncSession | Session) -> Product | None:
        stmt = select(Product).where(Product.id == product_id)
        result = await session_execute(stmt, session)
        return result.scalar()

    @staticmethod
    async def _select_many(stmt, session: AsyncSession | Session) -> list[ProductDTO]:
        result = await session_execute(stmt.order_by(Product.created_at.desc(), Product.name), session)
        return [ProductRepository.to_dto(product) for product in result.scalars().all()]

    @staticmethod
    async def create(product_id: str, product_dto: ProductDTO, session: AsyncSession | Session) -> str:
        product = Product(
            id=product_id,
            name=product_dto.name,
            description=product_dto.description,
            price=product_dto.price,
            old_price=product_dto.old_price,
            images=json.dumps(product_dto.images),
            category=product_dto.category,
            stock_quantity=product_dto.stock_quantity,
            in_stock=product_dto.in_stock,
            is_featured=product_dto.is_featured
        )
        if product_dto.created_at is not None:
            product.created_at = product_dto.created_at
        session.add(product)
        await session_flush(session)
        return product.id

    @staticmethod
    async def get_by_id(product_id: str, session: AsyncSession | Session) -> ProductDTO | None:
        product = await ProductRepository._get(product_id, session)
        if product is None:
            return None
        return ProductRepository.to_dto(product)

    @staticmethod
    async def get_all(session: AsyncSession | Session) -> list[ProductDTO]:
        return await ProductRepository._select_many(select(Product), session)

    @staticmethod
    async def get_by_category(category: str, session: AsyncSession | Session) -> list[ProductDTO]:
        return await ProductRepository._select_many(select(Product).where(Product.category == category), session)

    @staticmethod
    async def get_by_price_range(min_price: float, max_price: float | None,
                                 session: AsyncSession | Session) -> list[ProductDTO]:
        stmt = select(Product).where(Product.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(Product.price <= max_price)
        return await ProductRepository._select_many(stmt, session)

    @staticmethod
    async def update(product_id: str, values: dict, session: AsyncSession | Session) -> ProductDTO | None:
        product = await ProductRepository._get(product_id, session)
        if product is None:
            return None
        for column, value in values.items():
            if column == "images":
                value = json.dumps(value)
            setattr(product, column, value)
        await session_flush(session)
        # updated_at is expired by the flush, reselecting loads it without lazy IO
        return await ProductRepository.get_by_id(product_id, session)

    @staticmethod
    async def delete(product_id: str, session: AsyncSession | Session) -> ProductDTO | None:
        product = await ProductRepository._get(product_id, session)
        if product is None:
            return None
        product_dto = ProductRepository.to_dto(product)
        await session_delete(product, session)
        await session_flush(session)
        return product_dto
