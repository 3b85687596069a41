"""
Product catalog API for the storefront and the admin dashboard.

Routes (prefix /api/products):
    POST   /                    create a product
    GET    /                    all products, newest first
    GET    /category/{category} products of one category
    GET    /filter              products priced at most ?max_price (default 1000)
    GET    /filter/price        products within ?min_price and ?max_price
    GET    /{product_id}        single product
    PUT    /{product_id}        partial update
    DELETE /{product_id}        delete a product

Errors:
    404: product not found
"""

import logging

from fastapi import APIRouter, HTTPException, Query, status

from db import get_db_session
from enums.text_entity import TextEntity
from exceptions.product import ProductNotFoundException
from models.product import ProductDTO, ProductUpdateDTO
from services.product import ProductService
from utils.localizator import Localizator

logger = logging.getLogger(__name__)

product_router = APIRouter(prefix="/api/products", tags=["products"])


def _not_found(product_id: str) -> HTTPException:
    logger.warning(f"[Products] Product {product_id} not found")
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=Localizator.get_text(TextEntity.ADMIN, "product_not_found_error")
    )


@product_router.post("/", status_code=status.HTTP_201_CREATED)
async def create_product(payload: ProductDTO) -> ProductDTO:
    async with get_db_session() as session:
        return await ProductService.create_product(payload, session)


@product_router.get("/")
async def list_products() -> list[ProductDTO]:
    async with get_db_session() as session:
        return await ProductService.get_all(session)


@product_router.get("/category/{category}")
async def products_by_category(category: str) -> list[ProductDTO]:
    async with get_db_session() as session:
        return await ProductService.get_by_category(category, session)


@product_router.get("/filter")
async def products_by_max_price(max_price: float | None = Query(None, ge=0)) -> list[ProductDTO]:
    async with get_db_session() as session:
        return await ProductService.get_by_max_price(max_price, session)


@product_router.get("/filter/price")
async def products_by_price_range(
        min_price: float | None = Query(None, ge=0),
        max_price: float | None = Query(None, ge=0)
) -> list[ProductDTO]:
    async with get_db_session() as session:
        return await ProductService.get_by_price_range(min_price, max_price, session)


@product_router.get("/{product_id}")
async def get_product(product_id: str) -> ProductDTO:
    async with get_db_session() as session:
        try:
            return await ProductService.get_by_id(product_id, session)
        except ProductNotFoundException:
            raise _not_found(product_id)


@product_router.put("/{product_id}")
async def update_product(product_id: str, payload: ProductUpdateDTO) -> ProductDTO:
    async with get_db_session() as session:
        try:
            return await ProductService.update_product(product_id, payload, session)
        except ProductNotFoundException:
            raise _not_found(product_id)


@product_router.delete("/{product_id}")
async def delete_product(product_id: str) -> dict:
    async with get_db_session() as session:
        try:
            product = await ProductService.delete_product(product_id, session)
        except ProductNotFoundException:
            raise _not_found(product_id)
    return {
        "success": True,
        "message": Localizator.get_text(TextEntity.ADMIN, "product_deleted"),
        "product_id": product.id
    }
