from datetime import datetime

from pydantic import BaseModel, Field
from sqlalchemy import Column, String, Boolean, DateTime, LargeBinary, func

from models.base import Base


class User(Base):
    """
    Registered storefront customer or dashboard admin.

    Passwords are stored as a PBKDF2 hash with a per-user random salt,
    see services/password.py.
    """
    __tablename__ = "users"

    id = Column(String(32), primary_key=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, unique=True, index=True)
    mobile_no = Column(String, nullable=False, unique=True)
    password_hash = Column(LargeBinary, nullable=False)
    password_salt = Column(LargeBinary, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=func.now())


class UserDTO(BaseModel):
    id: str
    first_name: str
    last_name: str = ""
    email: str
    mobile_no: str
    is_admin: bool = False
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class RegistrationDTO(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = ""
    email: str = Field(min_length=3)
    mobile_no: str = Field(min_length=1)
    password: str = Field(min_length=1)
    confirm_password: str


class LoginDTO(BaseModel):
    email: str
    password: str
