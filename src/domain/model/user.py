from dataclasses import dataclass
from datetime import datetime

from bson import ObjectId

from domain.model.errors import ValidationError
from domain.model.fields import cast_string
from domain.model.timestamps import utc_now


@dataclass
class User:
    """Domain model representing a user."""
    id: str
    username: str
    password_hash: str
    created_at: datetime

    @staticmethod
    def create(username: str, password_hash: str) -> 'User':
        username = cast_string(username, "User", "username")
        validate_username(username)
        return User(
            id=str(ObjectId()),
            username=username,
            password_hash=password_hash,
            created_at=utc_now(),
        )

    def to_info(self) -> 'UserInfo':
        return UserInfo(id=self.id, username=self.username)


@dataclass(frozen=True)
class UserInfo:
    """Public-safe subset of a User."""
    id: str
    username: str


def validate_username(username: str | None) -> None:
    if username is None or not isinstance(username, str) or not username.strip():
        raise ValidationError("User validation failed: username: Path `username` is required.")
