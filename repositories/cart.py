import json

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush, session_delete
from models.cart import CartLine, CartLineDTO


class CartRepository:
    @staticmethod
    async def get_lines(user_id: str, session: AsyncSession | Session) -> list[CartLineDTO]:
        stmt = select(CartLine).where(CartLine.user_id == user_id).order_by(CartLine.position)
        result = await session_execute(stmt, session)
        return [
            CartLineDTO(
                product_id=line.product_id,
                name=line.name,
                unit_price=line.unit_price,
                previous_price=line.previous_price,
                quantity=line.quantity,
                image_refs=json.loads(line.image_refs or "[]")
            )
            for line in result.scalars().all()
        ]

    @staticmethod
    async def replace_lines(user_id: str, lines: list[CartLineDTO], session: AsyncSession | Session) -> None:
        """Store `lines` as the user's complete cart snapshot (last writer wins)."""
        stmt = select(CartLine).where(CartLine.user_id == user_id)
        result = await session_execute(stmt, session)
        existing = {line.product_id: line for line in result.scalars().all()}

        for position, line_dto in enumerate(lines):
            line = existing.pop(line_dto.product_id, None)
            if line is None:
                line = CartLine(user_id=user_id, product_id=line_dto.product_id)
                session.add(line)
            line.position = position
            line.name = line_dto.name
            line.unit_price = line_dto.unit_price
            line.previous_price = line_dto.previous_price
            line.quantity = line_dto.quantity
            line.image_refs = json.dumps(line_dto.image_refs)

        for stale_line in existing.values():
            await session_delete(stale_line, session)

        await session_flush(session)
