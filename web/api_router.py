"""
Order API for the admin dashboard.

Routes (prefix /api/orders):
    POST   /                  create an order
    GET    /                  list orders, newest first (?page=0)
    GET    /stats             totals, counts by status, revenue, recent orders
    GET    /monthly-revenue   revenue of paid orders per month, oldest first
    GET    /{order_id}        single order
    PUT    /{order_id}/status change order status
    DELETE /{order_id}        delete an order

Errors:
    400: unknown order status
    404: order not found
"""

import logging

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from db import get_db_session
from enums.text_entity import TextEntity
from exceptions.order import InvalidOrderStatusException, OrderNotFoundException
from models.order import MonthlyRevenueDTO, OrderDTO, OrderStatsDTO
from services.order import OrderService
from utils.localizator import Localizator

logger = logging.getLogger(__name__)

api_router = APIRouter(prefix="/api/orders", tags=["orders"])


class StatusPayload(BaseModel):
    status: str


def _not_found(order_id: int) -> HTTPException:
    logger.warning(f"[Orders] Order {order_id} not found")
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=Localizator.get_text(TextEntity.ADMIN, "order_not_found_error")
    )


@api_router.post("/", status_code=status.HTTP_201_CREATED)
async def create_order(payload: OrderDTO) -> OrderDTO:
    async with get_db_session() as session:
        return await OrderService.create_order(payload, session)


@api_router.get("/")
async def list_orders(page: int = Query(0, ge=0)) -> list[OrderDTO]:
    async with get_db_session() as session:
        return await OrderService.get_all(page, session)


@api_router.get("/stats")
async def order_stats() -> OrderStatsDTO:
    async with get_db_session() as session:
        return await OrderService.get_order_stats(session)


@api_router.get("/monthly-revenue")
async def monthly_revenue() -> list[MonthlyRevenueDTO]:
    async with get_db_session() as session:
        return await OrderService.get_monthly_revenue(session)


@api_router.get("/{order_id}")
async def get_order(order_id: int) -> OrderDTO:
    async with get_db_session() as session:
        try:
            return await OrderService.get_by_id(order_id, session)
        except OrderNotFoundException:
            raise _not_found(order_id)


@api_router.put("/{order_id}/status")
async def update_order_status(order_id: int, payload: StatusPayload) -> OrderDTO:
    async with get_db_session() as session:
        try:
            return await OrderService.update_status(order_id, payload.status, session)
        except InvalidOrderStatusException as e:
            logger.warning(f"[Orders] {e}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=Localizator.get_text(TextEntity.ADMIN, "order_invalid_status_error")
            )
        except OrderNotFoundException:
            raise _not_found(order_id)


@api_router.delete("/{order_id}")
async def delete_order(order_id: int) -> dict:
    async with get_db_session() as session:
        try:
            order = await OrderService.delete(order_id, session)
        except OrderNotFoundException:
            raise _not_found(order_id)
    return {
        "success": True,
        "message": Localizator.get_text(TextEntity.ADMIN, "order_deleted"),
        "order_id": order.id
    }
