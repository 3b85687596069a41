"""
Password hashing for user accounts.

PBKDF2-HMAC-SHA256 with a random 16-byte salt per user. Only the derived
hash and the salt are stored, never the password itself.

Usage:
    password_hash, salt = PasswordHasher.hash_password("s3cret")
    PasswordHasher.verify_password("s3cret", password_hash, salt)  # True
"""

import os

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

import config

SALT_LENGTH = 16
HASH_LENGTH = 32


class PasswordHasher:

    @staticmethod
    def _kdf(salt: bytes) -> PBKDF2HMAC:
        return PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=HASH_LENGTH,
            salt=salt,
            iterations=config.PASSWORD_HASH_ITERATIONS,
        )

    @staticmethod
    def hash_password(password: str) -> tuple[bytes, bytes]:
        """
        Returns:
            Tuple of (password_hash, salt) for separate field storage

        Raises:
            ValueError: If password is empty
        """
        if not password:
            raise ValueError("Password cannot be empty")
        salt = os.urandom(SALT_LENGTH)
        return PasswordHasher._kdf(salt).derive(password.encode()), salt

    @staticmethod
    def verify_password(password: str, password_hash: bytes, salt: bytes) -> bool:
        try:
            PasswordHasher._kdf(salt).verify(password.encode(), password_hash)
        except InvalidKey:
            return False
        return True
