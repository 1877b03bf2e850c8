"""In-memory implementation of UserRepository for testing."""

from dataclasses import replace

from domain.model.errors import DuplicateKeyError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, user: User) -> User:
        if any(u.username == user.username for u in self.store.values()):
            raise DuplicateKeyError(
                f"E11000 duplicate key error collection: users index: username_1 "
                f"dup key: {{ username: \"{user.username}\" }}"
            )
        self.store[user.id] = replace(user)
        return replace(user)

    # ── read operations ──────────────────────────────────────

    def get_by_username(self, username: str) -> User | None:
        for user in self.store.values():
            if user.username == username:
                return replace(user)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None
