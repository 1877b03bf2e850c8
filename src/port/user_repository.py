from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def create(self, user: User) -> User:
        """Persist a new user. Raise DuplicateKeyError if the username is taken."""
        ...

    def get_by_username(self, username: str) -> User | None:
        """Find a user by username. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...
