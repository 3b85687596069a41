from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush, session_delete
from models.address import Address, AddressDTO


class AddressRepository:
    """
    Per-user address collection with get-all / put-all semantics.

    There is no partial update: callers compute the complete new collection
    and write it back with put_all, which runs inside the caller's transaction.
    """

    @staticmethod
    async def get_all(user_id: str, session: AsyncSession | Session) -> list[AddressDTO]:
        stmt = select(Address).where(Address.user_id == user_id).order_by(Address.position)
        result = await session_execute(stmt, session)
        return [AddressDTO.model_validate(address, from_attributes=True) for address in result.scalars().all()]

    @staticmethod
    async def put_all(user_id: str, addresses: list[AddressDTO], session: AsyncSession | Session) -> None:
        """
        Replace the user's whole address collection.

        Rows are updated in place, inserted or deleted so that afterwards the
        stored collection equals `addresses` (same ids, same order).

        Args:
            user_id: Owner of the collection
            addresses: Complete new collection, in display order
            session: Database session (not committed here)
        """
        stmt = select(Address).where(Address.user_id == user_id)
        result = await session_execute(stmt, session)
        existing = {address.id: address for address in result.scalars().all()}

        for position, address_dto in enumerate(addresses):
            values = address_dto.model_dump()
            address = existing.pop(address_dto.id, None)
            if address is None:
                session.add(Address(user_id=user_id, position=position, **values))
            else:
                for field, value in values.items():
                    setattr(address, field, value)
                address.position = position

        for stale_address in existing.values():
            await session_delete(stale_address, session)

        await session_flush(session)
