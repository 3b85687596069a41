import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_commit, session_rollback
from exceptions.user import (
    InvalidCredentialsException,
    PasswordMismatchException,
    UserAlreadyExistsException,
    UserNotFoundException,
)
from models.session import UserSession
from models.user import RegistrationDTO, User, UserDTO
from repositories.user import UserRepository
from services.password import PasswordHasher

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    async def register(
            registration: RegistrationDTO,
            session: AsyncSession | Session,
            is_admin: bool = False
    ) -> UserDTO:
        """
        Create an account.

        Checks run in order: e-mail taken, mobile number taken, password
        confirmation. E-mail addresses are compared case-insensitively.

        Raises:
            UserAlreadyExistsException: e-mail or mobile number in use
            PasswordMismatchException: password and confirmation differ
        """
        email = registration.email.strip().lower()
        if await UserRepository.exists_with_email(email, session):
            raise UserAlreadyExistsException("email", email)
        if await UserRepository.exists_with_mobile(registration.mobile_no, session):
            raise UserAlreadyExistsException("mobile_no", registration.mobile_no)
        if registration.password != registration.confirm_password:
            raise PasswordMismatchException(email)

        password_hash, salt = PasswordHasher.hash_password(registration.password)
        user = User(
            id=uuid.uuid4().hex,
            first_name=registration.first_name,
            last_name=registration.last_name,
            email=email,
            mobile_no=registration.mobile_no,
            password_hash=password_hash,
            password_salt=salt,
            is_admin=is_admin
        )
        try:
            user_id = await UserRepository.create(user, session)
            await session_commit(session)
        except IntegrityError as e:
            # Concurrent registration with the same e-mail or mobile number
            await session_rollback(session)
            raise UserAlreadyExistsException("email", email) from e
        logger.info(f"[Users] Registered user {user_id} (admin={is_admin})")
        return await UserRepository.get_by_id(user_id, session)

    @staticmethod
    async def create_admin(registration: RegistrationDTO, session: AsyncSession | Session) -> UserDTO:
        return await UserService.register(registration, session, is_admin=True)

    @staticmethod
    async def authenticate(email: str, password: str, session: AsyncSession | Session) -> UserDTO:
        """
        Raises:
            InvalidCredentialsException: unknown e-mail or wrong password
        """
        email = email.strip().lower()
        credentials = await UserRepository.get_credentials(email, session)
        if credentials is None:
            logger.warning(f"[Users] Login for unknown e-mail {email}")
            raise InvalidCredentialsException(email)
        user, password_hash, salt = credentials
        if not PasswordHasher.verify_password(password, password_hash, salt):
            logger.warning(f"[Users] Wrong password for user {user.id}")
            raise InvalidCredentialsException(email)
        return user

    @staticmethod
    async def login(user_session: UserSession, email: str, password: str,
                    session: AsyncSession | Session) -> UserDTO:
        """Authenticate and bind the account to the client's UserSession."""
        user = await UserService.authenticate(email, password, session)
        user_session.login(user.id, user.full_name, user.is_admin)
        return user

    @staticmethod
    async def get_all(session: AsyncSession | Session) -> list[UserDTO]:
        return await UserRepository.get_all(session)

    @staticmethod
    async def get_by_id(user_id: str, session: AsyncSession | Session) -> UserDTO:
        user = await UserRepository.get_by_id(user_id, session)
        if user is None:
            raise UserNotFoundException(user_id)
        return user
