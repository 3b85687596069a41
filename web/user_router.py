"""
User accounts API.

Routes (prefix /api/users):
    POST /register      create a customer account
    POST /login         check e-mail and password, returns the account
    POST /admin         create an admin account
    GET  /              all accounts, newest first
    GET  /{user_id}     single account

Errors:
    400: password confirmation does not match
    401: wrong e-mail or password
    404: user not found
    409: e-mail or mobile number already in use
"""

import logging

from fastapi import APIRouter, HTTPException, status

from db import get_db_session
from enums.text_entity import TextEntity
from exceptions.user import (
    InvalidCredentialsException,
    PasswordMismatchException,
    UserAlreadyExistsException,
    UserNotFoundException,
)
from models.user import LoginDTO, RegistrationDTO, UserDTO
from services.user import UserService
from utils.localizator import Localizator

logger = logging.getLogger(__name__)

user_router = APIRouter(prefix="/api/users", tags=["users"])


async def _register(payload: RegistrationDTO, is_admin: bool) -> UserDTO:
    async with get_db_session() as session:
        try:
            return await UserService.register(payload, session, is_admin=is_admin)
        except UserAlreadyExistsException as e:
            logger.info(f"[Users] Registration rejected: {e}")
            key = "register_mobile_taken" if e.field == "mobile_no" else "register_email_taken"
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=Localizator.get_text(TextEntity.USER, key)
            )
        except PasswordMismatchException:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=Localizator.get_text(TextEntity.USER, "register_password_mismatch")
            )


@user_router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_user(payload: RegistrationDTO) -> UserDTO:
    return await _register(payload, is_admin=False)


@user_router.post("/admin", status_code=status.HTTP_201_CREATED)
async def create_admin(payload: RegistrationDTO) -> UserDTO:
    return await _register(payload, is_admin=True)


@user_router.post("/login")
async def login_user(payload: LoginDTO) -> UserDTO:
    async with get_db_session() as session:
        try:
            return await UserService.authenticate(payload.email, payload.password, session)
        except InvalidCredentialsException:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=Localizator.get_text(TextEntity.USER, "login_invalid_credentials")
            )


@user_router.get("/")
async def list_users() -> list[UserDTO]:
    async with get_db_session() as session:
        return await UserService.get_all(session)


@user_router.get("/{user_id}")
async def get_user(user_id: str) -> UserDTO:
    async with get_db_session() as session:
        try:
            return await UserService.get_by_id(user_id, session)
        except UserNotFoundException:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=Localizator.get_text(TextEntity.ADMIN, "user_not_found_error")
            )
