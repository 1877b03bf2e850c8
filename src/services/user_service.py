"""User service — signup, login and public profile lookup.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import base64
import hashlib
import logging
import os

import bcrypt

from domain.model.errors import AuthenticationError, NotFoundError, ValidationError
from domain.model.user import User, UserInfo
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 10


def _bcrypt_rounds() -> int:
    return int(os.getenv("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS))


def _bcrypt_input(password: str) -> bytes:
    """SHA-256 digest, base64 encoded: 44 bytes, under bcrypt's 72-byte input limit."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def _hash_password(password: str | None) -> str:
    if password is None:
        raise ValidationError("Illegal arguments: data and salt arguments required")
    salt = bcrypt.gensalt(rounds=_bcrypt_rounds())
    return bcrypt.hashpw(_bcrypt_input(password), salt).decode("utf-8")


def _verify_password(plain: str | None, hashed: str) -> bool:
    if plain is None:
        return False
    return bcrypt.checkpw(_bcrypt_input(plain), hashed.encode("utf-8"))


def create_user(repo: UserRepository, username: str | None, password: str | None) -> User:
    """Create a user with a bcrypt-hashed password.

    Raises:
        ValidationError: username missing, or password missing (hashing inputs incomplete)
        DuplicateKeyError: username already taken
    """
    password_hash = _hash_password(password)

    user = repo.create(User.create(username=username, password_hash=password_hash))
    logger.info("User signed up", extra={"userId": user.id, "username": user.username})
    return user


def login_user(repo: UserRepository, username: str | None, password: str | None) -> User:
    """Check credentials and return the matching User.

    Raises:
        AuthenticationError: unknown username ("Invalid username!") or
            wrong password ("Invalid password!")
    """
    user = repo.get_by_username(username) if username else None
    if user is None:
        raise AuthenticationError("Invalid username!")

    if not _verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid password!")

    logger.info("User logged in", extra={"userId": user.id})
    return user


def get_user_info_by_id(repo: UserRepository, user_id: str) -> UserInfo:
    """Return the public fields of a user.

    Raises:
        NotFoundError: no user with this id
    """
    user = repo.get_by_id(user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user.to_info()
