from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from models.user import User, UserDTO


class UserRepository:
    @staticmethod
    async def create(user: User, session: AsyncSession | Session) -> str:
        session.add(user)
        await session_flush(session)
        return user.id

    @staticmethod
    async def get_by_id(user_id: str, session: AsyncSession | Session) -> UserDTO | None:
        stmt = select(User).where(User.id == user_id)
        result = await session_execute(stmt, session)
        user = result.scalar()
        if user is None:
            return None
        return UserDTO.model_validate(user, from_attributes=True)

    @staticmethod
    async def get_all(session: AsyncSession | Session) -> list[UserDTO]:
        stmt = select(User).order_by(User.created_at.desc(), User.email)
        result = await session_execute(stmt, session)
        return [UserDTO.model_validate(user, from_attributes=True) for user in result.scalars().all()]

    @staticmethod
    async def get_credentials(email: str, session: AsyncSession | Session) -> tuple[UserDTO, bytes, bytes] | None:
        """
        Returns:
            (user, password_hash, password_salt) or None if the e-mail is unknown
        """
        stmt = select(User).where(User.email == email)
        result = await session_execute(stmt, session)
        user = result.scalar()
        if user is None:
            return None
        return UserDTO.model_validate(user, from_attributes=True), user.password_hash, user.password_salt

    @staticmethod
    async def exists_with_email(email: str, session: AsyncSession | Session) -> bool:
        result = await session_execute(select(User.id).where(User.email == email), session)
        return result.scalar() is not None

    @staticmethod
    async def exists_with_mobile(mobile_no: str, session: AsyncSession | Session) -> bool:
        result = await session_execute(select(User.id).where(User.mobile_no == mobile_no), session)
        return result.scalar() is not None
